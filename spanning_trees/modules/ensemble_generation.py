from __future__ import annotations
from functools import partial
from random import Random
from typing import Hashable, Optional
from gerrychain import MarkovChain, Partition
from gerrychain.accept import always_accept
from linetimer import linetimer
from ..custom_types import Graph, SpanningTreeBuffer, PartitionSplitError
from .spanning_tree import SpanningTreeSampler, SamplerKind, make_sampler
import consts
import logging
logger = logging.getLogger(__name__)


def tree_recom(partition: Partition, sampler: SpanningTreeSampler, rng: Random, epsilon: float, pop_col: str = consts.POP_COL, node_repeats: int = consts.RECOM_NODE_REPEATS, buf: Optional[SpanningTreeBuffer] = None) -> Partition:
    """
    ReCom proposal driven by a spanning tree sampler. Can be handed to the
    gerrychain MarkovChain constructor through functools.partial. Merges two
    adjacent districts picked through a random cut edge, draws spanning
    trees of the merged subgraph until one has an edge whose removal leaves
    two parts of equal population (within epsilon), and reassigns the nodes
    accordingly.

    Arguments:
        partition: current gerrychain partition; needs a cut_edges updater
        sampler: spanning tree sampler used for the merged subgraph
        rng: random number generator for the cut edge, the trees and the split
        epsilon: acceptable relative population error of each new district
        pop_col: node attribute holding population
        node_repeats: number of trees to try before giving up
        buf: tree buffer reused across steps; allocated per call if omitted
    Returns:
        a new partition after one step of ReCom
    """

    edge = rng.choice(list(partition[consts.CUT_EDGE_UPDATER]))
    part_ids = (partition.assignment[edge[0]], partition.assignment[edge[1]])
    logger.debug("doing recom on districts %s, %s" % part_ids)
    merged_graph = merge_districts(partition, part_ids, pop_col)
    if buf is None:
        buf = SpanningTreeBuffer(merged_graph.n)
    on_target, other = split_graph_by_pop(merged_graph, sampler, buf, rng, merged_graph.total_pop / 2, epsilon, node_repeats)
    flips = dict.fromkeys(on_target, part_ids[0]) | dict.fromkeys(other, part_ids[1])
    return partition.flip(flips)


def merge_districts(partition: Partition, part_ids: tuple[int, int], pop_col: str = consts.POP_COL) -> Graph:
    """Graph of the union of two districts, with nodes numbered in partition.graph order."""

    merged_nodes = partition.parts[part_ids[0]] | partition.parts[part_ids[1]]
    return Graph.from_nodes(partition.graph, [node for node in partition.graph.nodes if node in merged_nodes], pop_col)


def split_graph_by_pop(graph: Graph, sampler: SpanningTreeSampler, buf: SpanningTreeBuffer, rng: Random, pop_target: float, epsilon: float, node_repeats: int = consts.RECOM_NODE_REPEATS) -> tuple[list[Hashable], list[Hashable]]:
    """
    Draws spanning trees of graph until removing a tree edge cuts off a
    component with population in [pop_target * (1 - epsilon), pop_target *
    (1 + epsilon)]. Returns the node labels of that component and of the
    rest of the graph, in that order.
    """

    pop_rng = (pop_target * (1 - epsilon), pop_target * (1 + epsilon))
    for i in range(node_repeats):
        sampler.random_spanning_tree(graph, buf, rng)
        cut = find_cut(graph, buf, rng, pop_rng)
        if cut is not None:
            logger.debug("finished recom after %d random spanning trees on %d nodes" % (i+1, graph.n))
            on_target = set(cut)
            return ([graph.labels[u] for u in cut], [graph.labels[u] for u in range(graph.n) if u not in on_target])
    logger.error(f"no balanced cut of {graph} after {node_repeats} spanning trees")
    raise PartitionSplitError("partitioning failed; could not find cut meeting population constraints")


def find_cut(graph: Graph, buf: SpanningTreeBuffer, rng: Random, pop_rng: tuple[float, float]) -> Optional[list[int]]:
    """
    Roots the tree in buf at a random node and sums populations bottom-up.
    Every tree edge that cuts off a component within pop_rng (on either side)
    is a candidate; one is picked at random. Returns the nodes of the
    on-target component, or None if there is no candidate.
    """

    root = rng.randrange(graph.n)
    parent = [-1] * graph.n
    order: list[int] = []
    stack = [root]
    while stack:
        u = stack.pop()
        order.append(u)
        for v in buf.st[u]:
            if v != parent[u]:
                parent[v] = u
                stack.append(v)

    subtree_pop = list(graph.pops)
    candidates: list[tuple[int, bool]] = []
    for u in reversed(order):
        if u == root:
            continue
        if pop_rng[0] <= subtree_pop[u] <= pop_rng[1]:
            candidates.append((u, True))
        elif pop_rng[0] <= graph.total_pop - subtree_pop[u] <= pop_rng[1]:
            candidates.append((u, False))
        subtree_pop[parent[u]] += subtree_pop[u]
    if not candidates:
        return None

    cut_node, subtree_on_target = rng.choice(candidates)
    subtree: list[int] = []
    stack = [cut_node]
    while stack:
        u = stack.pop()
        subtree.append(u)
        stack.extend(v for v in buf.st[u] if v != parent[u])
    if subtree_on_target:
        return subtree
    in_subtree = set(subtree)
    return [u for u in range(graph.n) if u not in in_subtree]


@linetimer(name="generating random map", logger_func=logger.debug)
def gen_random_map(seed_partition: Partition, kind: SamplerKind | str, n_recom_steps: int, epsilon: float, rng: Random, constraints: Optional[list] = None) -> Partition:
    """Runs a ReCom chain of n_recom_steps steps from seed_partition and returns the last partition."""

    sampler = make_sampler(kind, len(seed_partition.graph.nodes), rng)
    buf = SpanningTreeBuffer(len(seed_partition.graph.nodes))
    chain = MarkovChain(
        partial(tree_recom, sampler=sampler, rng=rng, epsilon=epsilon, buf=buf),
        constraints or [],
        always_accept,
        seed_partition,
        total_steps=n_recom_steps
    )
    for partition in chain:
        continue
    return partition
