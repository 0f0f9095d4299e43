from collections import Counter
from random import Random
import sys
from gerrychain import Graph as GerryGraph, Partition
from gerrychain.updaters import Tally, cut_edges
from linetimer import linetimer, CodeTimer
import networkx as nx
from ..custom_types import Graph, SpanningTreeBuffer
from ..modules.spanning_tree import SamplerKind, make_sampler
from ..modules.ensemble_generation import gen_random_map
from ..modules.utils import tree_key
import consts
import run_config
import logging
logging.basicConfig(level=run_config.LOGGING_LEVEL)
logger = logging.getLogger(__name__)


def gen_striped_partition(graph: GerryGraph, n_districts: int) -> Partition:
    """Seed partition of a grid graph that splits the columns into n_districts vertical stripes."""

    n_cols = max(col for col, _ in graph.nodes) + 1
    for node in graph.nodes:
        graph.nodes[node][consts.POP_COL] = 1
        graph.nodes[node][consts.DISTRICT_COL] = node[0] * n_districts // n_cols
    return Partition(graph,
                     assignment=consts.DISTRICT_COL,
                     updaters={consts.CUT_EDGE_UPDATER: cut_edges,
                               consts.POP_UPDATER: Tally(consts.POP_COL, consts.POP_UPDATER)})


def sample_trees(graph: Graph, kind: SamplerKind, n_samples: int, rng: Random) -> Counter:
    sampler = make_sampler(kind, graph.n, rng)
    buf = SpanningTreeBuffer(graph.n)
    counts: Counter = Counter()
    with CodeTimer(f"sampling {n_samples} {kind.value} spanning trees", logger_func=logger.info):
        for _ in range(n_samples):
            sampler.random_spanning_tree(graph, buf, rng)
            counts[tree_key(buf)] += 1
    return counts


@linetimer(name="running main method", logger_func=logger.info)
def main() -> None:
    kind = SamplerKind(sys.argv[1] if len(sys.argv) > 1 else run_config.SAMPLER)
    n_samples = int(sys.argv[2]) if len(sys.argv) > 2 else run_config.N_SAMPLES
    rng = Random(run_config.SEED)

    grid = GerryGraph.from_networkx(nx.grid_2d_graph(*run_config.GRID_SHAPE))
    graph = Graph.from_networkx(grid)
    logger.info(f"sampling from {graph}")
    counts = sample_trees(graph, kind, n_samples, rng)
    logger.info(f"{len(counts)} distinct spanning trees in {n_samples} samples")

    seed_partition = gen_striped_partition(grid, run_config.N_DISTRICTS)
    partition = gen_random_map(seed_partition, kind, run_config.N_RECOM_STEPS, run_config.EPSILON, rng)
    logger.info(f"district populations after {run_config.N_RECOM_STEPS} recom steps: {dict(partition[consts.POP_UPDATER])}")


if __name__ == "__main__":
    main()
