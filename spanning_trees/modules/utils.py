from ..custom_types import Graph, SpanningTreeBuffer, Edge
from .union_find import UnionFind
import networkx as nx


def is_spanning_tree(graph: Graph, buf: SpanningTreeBuffer) -> bool:
    """
    Checks that buf holds a spanning tree of graph: symmetric adjacency,
    n-1 edges that all exist in graph, and no cycles (a separate union-find
    pass over the tree edges).
    """

    if len(buf) != graph.n:
        return False
    for u, adj in enumerate(buf.st):
        for v in adj:
            if u not in buf.st[v] or graph.edge_index(u, v) < 0:
                return False
    edges = list(buf.edges())
    if len(edges) != graph.n - 1:
        return False
    uf = UnionFind(graph.n)
    return all(uf.union(u, v) for u, v in edges)


def tree_key(buf: SpanningTreeBuffer) -> frozenset[Edge]:
    """Hashable snapshot of the tree in buf, for counting distinct trees."""

    return frozenset(buf.edges())


def to_networkx(graph: Graph, buf: SpanningTreeBuffer) -> nx.Graph:
    """Copies the tree in buf into a networkx graph over the original node labels of graph."""

    tree: nx.Graph = nx.Graph()
    tree.add_nodes_from(graph.labels)
    tree.add_edges_from((graph.labels[u], graph.labels[v]) for u, v in buf.edges())
    return tree
