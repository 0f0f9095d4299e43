from random import Random
import pytest
import networkx as nx

from spanning_trees.custom_types import Graph


@pytest.fixture
def rng():
    return Random(2018)


@pytest.fixture
def single_node():
    return Graph(1, [])


@pytest.fixture
def cycle4():
    return Graph(4, [(0, 1), (1, 2), (2, 3), (3, 0)])


@pytest.fixture
def triangle():
    return Graph(3, [(0, 1), (1, 2), (0, 2)])


@pytest.fixture
def k4():
    return Graph.from_networkx(nx.complete_graph(4))


@pytest.fixture
def grid():
    return Graph.from_networkx(nx.grid_2d_graph(5, 7))


@pytest.fixture
def disconnected():
    # two triangles with no edge between them
    return Graph(6, [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)])


@pytest.fixture
def big_star():
    return Graph.from_networkx(nx.star_graph(300))
