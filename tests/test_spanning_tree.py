from collections import Counter
from random import Random
import pytest
import networkx as nx

from spanning_trees.custom_types import Graph, SpanningTreeBuffer, DisconnectedGraphError, DegreeLimitError
from spanning_trees.modules.spanning_tree import USTSampler, RMSTSampler, SamplerKind, make_sampler, minimum_spanning_tree
from spanning_trees.modules.utils import is_spanning_tree, tree_key


SAMPLER_KINDS = [SamplerKind.UST, SamplerKind.RMST]


def draw(graph, kind, n_samples, seed=2018):
    rng = Random(seed)
    sampler = make_sampler(kind, graph.n, rng)
    buf = SpanningTreeBuffer(graph.n)
    counts = Counter()
    for _ in range(n_samples):
        sampler.random_spanning_tree(graph, buf, rng)
        counts[tree_key(buf)] += 1
    return counts


@pytest.mark.parametrize("kind", SAMPLER_KINDS)
@pytest.mark.parametrize("graph_fixture", ["cycle4", "triangle", "k4", "grid"])
def test_samples_are_spanning_trees(kind, graph_fixture, request, rng):
    graph = request.getfixturevalue(graph_fixture)
    sampler = make_sampler(kind, graph.n, rng)
    buf = SpanningTreeBuffer(graph.n)
    for _ in range(50):
        sampler.random_spanning_tree(graph, buf, rng)
        assert buf.n_edges() == graph.n - 1
        assert all(len(adj) > 0 for adj in buf.st)
        assert is_spanning_tree(graph, buf)


def test_ust_is_uniform_on_cycle(cycle4):
    counts = draw(cycle4, SamplerKind.UST, 4000)
    assert len(counts) == 4
    for count in counts.values():
        assert abs(count - 1000) < 150


def test_ust_is_uniform_on_complete_graph(k4):
    counts = draw(k4, SamplerKind.UST, 16000)
    # Cayley's formula: 4^(4-2) spanning trees
    assert len(counts) == 16
    for count in counts.values():
        assert abs(count - 1000) < 160


def test_rmst_drops_each_triangle_edge_equally_often(triangle):
    counts = draw(triangle, SamplerKind.RMST, 6000)
    excluded = Counter()
    for tree, count in counts.items():
        (edge,) = set(triangle.edges) - tree
        excluded[edge] += count
    assert len(excluded) == 3
    for count in excluded.values():
        assert abs(count - 2000) < 200


def test_rmst_keeps_both_edges_of_a_path():
    path = Graph(3, [(0, 1), (1, 2)])
    counts = draw(path, SamplerKind.RMST, 100)
    assert counts == {frozenset(path.edges): 100}


@pytest.mark.parametrize("kind", SAMPLER_KINDS)
def test_single_node_gives_empty_tree(kind, single_node, rng):
    sampler = make_sampler(kind, 1, rng)
    buf = SpanningTreeBuffer(1)
    sampler.random_spanning_tree(single_node, buf, rng)
    assert buf.st == [[]]


@pytest.mark.parametrize("kind", SAMPLER_KINDS)
def test_same_seed_same_trees(kind, grid):
    runs = []
    for _ in range(2):
        rng = Random(42)
        sampler = make_sampler(kind, grid.n, rng)
        buf = SpanningTreeBuffer(grid.n)
        trees = []
        for _ in range(5):
            sampler.random_spanning_tree(grid, buf, rng)
            trees.append([list(adj) for adj in buf.st])
        runs.append(trees)
    assert runs[0] == runs[1]


@pytest.mark.parametrize("kind", SAMPLER_KINDS)
def test_disconnected_graph_fails(kind, disconnected, rng):
    sampler = make_sampler(kind, disconnected.n, rng)
    buf = SpanningTreeBuffer(disconnected.n)
    with pytest.raises(DisconnectedGraphError):
        sampler.random_spanning_tree(disconnected, buf, rng)


def test_rmst_failure_leaves_buffer_empty(disconnected):
    sampler = RMSTSampler(6)
    buf = SpanningTreeBuffer(disconnected.n)
    with pytest.raises(DisconnectedGraphError):
        sampler.random_spanning_tree(disconnected, buf, Random(1))
    assert buf.n_edges() == 0
    assert all(not adj for adj in buf.st)


def test_ust_rejects_high_degree(big_star, rng):
    sampler = USTSampler(big_star.n, rng)
    buf = SpanningTreeBuffer(big_star.n)
    with pytest.raises(DegreeLimitError):
        sampler.random_spanning_tree(big_star, buf, rng)


def test_rmst_has_no_degree_limit(big_star, rng):
    sampler = RMSTSampler(big_star.n)
    buf = SpanningTreeBuffer(big_star.n)
    sampler.random_spanning_tree(big_star, buf, rng)
    assert len(buf.st[0]) == 300
    assert is_spanning_tree(big_star, buf)


def test_ust_accepts_degree_256(rng):
    star = Graph.from_networkx(nx.star_graph(256))
    sampler = USTSampler(star.n, rng)
    buf = SpanningTreeBuffer(star.n)
    sampler.random_spanning_tree(star, buf, rng)
    assert sorted(buf.st[0]) == list(range(1, 257))


@pytest.mark.parametrize("kind", SAMPLER_KINDS)
def test_buffer_is_overwritten(kind, k4, grid, rng):
    sampler = make_sampler(kind, grid.n, rng)
    buf = SpanningTreeBuffer(grid.n)
    sampler.random_spanning_tree(grid, buf, rng)
    sampler.random_spanning_tree(grid, buf, rng)
    assert buf.n_edges() == grid.n - 1
    assert is_spanning_tree(grid, buf)

    # a smaller graph through the same buffer and sampler
    sampler.random_spanning_tree(k4, buf, rng)
    assert len(buf) == 4
    assert buf.n_edges() == 3
    assert is_spanning_tree(k4, buf)


def test_minimum_spanning_tree_follows_weights(cycle4):
    # edges: (0, 1), (0, 3), (1, 2), (2, 3); the heaviest one is left out
    buf = SpanningTreeBuffer(cycle4.n)
    minimum_spanning_tree(cycle4, buf, [5, 1, 9, 3])
    assert set(buf.edges()) == {(0, 1), (0, 3), (2, 3)}


def test_minimum_spanning_tree_breaks_ties_by_edge(cycle4):
    buf = SpanningTreeBuffer(cycle4.n)
    minimum_spanning_tree(cycle4, buf, [7, 7, 7, 7])
    assert set(buf.edges()) == {(0, 1), (0, 3), (1, 2)}


def test_minimum_spanning_tree_needs_a_weight_per_edge(cycle4):
    buf = SpanningTreeBuffer(cycle4.n)
    with pytest.raises(ValueError):
        minimum_spanning_tree(cycle4, buf, [1, 2, 3])


def test_make_sampler_accepts_names(rng):
    assert isinstance(make_sampler("ust", 4, rng), USTSampler)
    assert isinstance(make_sampler("rmst", 4, rng), RMSTSampler)
    with pytest.raises(ValueError):
        make_sampler("kruskal", 4, rng)
