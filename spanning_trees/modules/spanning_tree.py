from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from random import Random
from typing import Optional
from ..custom_types import Graph, SpanningTreeBuffer, SpanningTreeError, DisconnectedGraphError, DegreeLimitError
from .buffers import RandomRangeBuffer, USTBuffer
from .union_find import UnionFind
import consts
import logging
logger = logging.getLogger(__name__)


class SpanningTreeSampler(ABC):
    """
    Interface shared by the spanning tree samplers. A driver holds one
    sampler, one Graph and one SpanningTreeBuffer and calls
    random_spanning_tree() repeatedly without caring which policy it uses.
    """

    @abstractmethod
    def random_spanning_tree(self, graph: Graph, buf: SpanningTreeBuffer, rng: Random) -> None:
        """Samples a random spanning tree of graph using rng and writes it into buf."""


class SamplerKind(Enum):
    """Spanning tree sampling policies."""

    UST = "ust"
    RMST = "rmst"


class USTSampler(SpanningTreeSampler):
    """Samples spanning trees from the uniform distribution."""

    ust_buf: USTBuffer
    range_buf: RandomRangeBuffer

    def __init__(self, n: int, rng: Random) -> None:
        """
        Creates the sampler and its buffers for a graph of about n nodes. The
        random byte reservoir is filled from rng.
        """

        self.ust_buf = USTBuffer(n)
        self.range_buf = RandomRangeBuffer(rng)
        logger.debug(f"created UST sampler for {n} nodes")

    def random_spanning_tree(self, graph: Graph, buf: SpanningTreeBuffer, rng: Random) -> None:
        """
        Draws a spanning tree of graph from the uniform distribution with
        Wilson's algorithm, a loop-erased random walk [1]. Every node not yet
        in the tree starts a walk that records, for each node it passes, the
        neighbor it left by; a revisited node gets its successor overwritten,
        which erases the loop. Once the walk hits the tree, the recorded path
        is retraced and absorbed.

        Arguments:
            graph: the graph to span; must be connected and have a maximum
            degree of at most 256
            buf: the buffer the tree is written into
            rng: random number generator for the root choice and for refilling
            the random byte reservoir
        Raises:
            DegreeLimitError: if a node has more than 256 neighbors
            DisconnectedGraphError: if graph is not connected
            SpanningTreeError: if the walk did not produce n-1 tree edges

        [1] Wilson, David Bruce. "Generating random spanning trees more quickly
            than the cover time." Proceedings of the twenty-eighth annual ACM
            symposium on Theory of computing. 1996.
        """

        n = graph.n
        if graph.max_degree > consts.MAX_UST_DEGREE:
            logger.error(f"{graph} exceeds the uniform sampler degree limit of {consts.MAX_UST_DEGREE}")
            raise DegreeLimitError("maximum degree %d exceeds %d" % (graph.max_degree, consts.MAX_UST_DEGREE))
        if not graph.connected:
            logger.error(f"{graph} is not connected; no spanning tree exists")
            raise DisconnectedGraphError("cannot sample a spanning tree of a disconnected graph")

        buf.resize(n)
        buf.clear()
        self.ust_buf.clear(n)
        in_tree, nxt, tree_edges = self.ust_buf.in_tree, self.ust_buf.next, self.ust_buf.edges
        neighbors = graph.neighbors

        root = rng.randrange(n)
        in_tree[root] = True
        for i in range(n):
            u = i
            while not in_tree[u]:
                adj = neighbors[u]
                nxt[u] = adj[self.range_buf.range(rng, len(adj))]
                u = nxt[u]
            u = i
            while not in_tree[u]:
                in_tree[u] = True
                u = nxt[u]

        for curr, prev in enumerate(nxt):
            if prev >= 0:
                edge_idx = graph.edge_index(curr, prev)
                if edge_idx >= 0:
                    tree_edges.append(edge_idx)
        if len(tree_edges) != n - 1:
            logger.error(f"Wilson's algorithm produced {len(tree_edges)} edges on {graph}")
            raise SpanningTreeError("expected to have %d edges in spanning tree but got %d" % (n - 1, len(tree_edges)))

        for edge_idx in tree_edges:
            src, dst = graph.edges[edge_idx]
            buf.st[src].append(dst)
            buf.st[dst].append(src)


class RMSTSampler(SpanningTreeSampler):
    """
    Samples spanning trees by drawing random edge weights and taking the
    minimum spanning tree. Cheaper than USTSampler, but the trees are not
    uniformly distributed.
    """

    weights: list[int]
    union_find: UnionFind

    def __init__(self, n: int) -> None:
        self.weights = [0] * (consts.RMST_WEIGHTS_PER_NODE * n)
        self.union_find = UnionFind(n)
        logger.debug(f"created RMST sampler for {n} nodes")

    def random_spanning_tree(self, graph: Graph, buf: SpanningTreeBuffer, rng: Random) -> None:
        """
        Draws a spanning tree of graph by giving every edge an independent
        uniform 32-bit weight and finding the minimum spanning tree with
        Kruskal's algorithm.

        Arguments:
            graph: the graph to span
            buf: the buffer the tree is written into
            rng: random number generator for the edge weights
        Raises:
            DisconnectedGraphError: if graph is not connected
        """

        n_edges = len(graph.edges)
        if len(self.weights) < n_edges:
            self.weights.extend([0] * (n_edges - len(self.weights)))
        for idx in range(n_edges):
            self.weights[idx] = rng.getrandbits(consts.WEIGHT_BITS)
        minimum_spanning_tree(graph, buf, self.weights, self.union_find)


def minimum_spanning_tree(graph: Graph, buf: SpanningTreeBuffer, weights: list[int], union_find: Optional[UnionFind] = None) -> None:
    """
    Kruskal's algorithm: finds the minimum spanning tree of graph under
    weights (one per edge of graph.edges, extra entries ignored) and writes
    it into buf. Equal weights are ordered by edge, so the result is
    deterministic.

    Arguments:
        graph: the graph to span
        buf: the buffer the tree is written into
        weights: edge weights in graph.edges order
        union_find: optional instance to reuse across calls
    Raises:
        ValueError: if there are fewer weights than edges
        DisconnectedGraphError: if fewer than n-1 edges could be joined; buf
        is left empty
    """

    if len(weights) < len(graph.edges):
        raise ValueError("expected %d edge weights but got %d" % (len(graph.edges), len(weights)))
    buf.resize(graph.n)
    buf.clear()
    if union_find is None:
        union_find = UnionFind(graph.n)
    else:
        union_find.reset(graph.n)

    target = graph.n - 1
    for _, (src, dst) in sorted(zip(weights[:len(graph.edges)], graph.edges)):
        if union_find.unions == target:
            break
        if union_find.union(src, dst):
            buf.st[src].append(dst)
            buf.st[dst].append(src)
    if union_find.unions != target:
        logger.error(f"Kruskal's algorithm joined {union_find.unions} edges on {graph}")
        buf.clear()
        raise DisconnectedGraphError("expected to have %d edges in spanning tree but got %d" % (target, union_find.unions))


def make_sampler(kind: SamplerKind | str, n: int, rng: Random) -> SpanningTreeSampler:
    """Creates a sampler for the given policy, sized for a graph of about n nodes."""

    kind = SamplerKind(kind)
    if kind is SamplerKind.UST:
        return USTSampler(n, rng)
    return RMSTSampler(n)
