from __future__ import annotations
from bisect import bisect_left
from typing import Any, Hashable, Iterable, Iterator, Optional
from .modules.union_find import UnionFind
import networkx as nx


Edge: type = tuple[int, int]


class SpanningTreeError(Exception):
    """Raised when a sampler cannot produce a spanning tree of n-1 edges."""


class DisconnectedGraphError(SpanningTreeError):
    """Raised when the graph has more than one connected component."""


class DegreeLimitError(SpanningTreeError):
    """Raised when a node has more neighbors than the uniform sampler can pick from."""


class PartitionSplitError(SpanningTreeError):
    """Raised when no spanning tree edge splits a graph within the population tolerance."""


class Graph:
    """
    Immutable undirected graph on the nodes 0..n, laid out for fast spanning
    tree sampling.

    Fields:
        n: number of nodes
        edges: (src, dst) pairs with src < dst, sorted by (src, dst), without
        duplicates or self-loops
        edges_start: edges_start[u] is the index of the first edge with src ==
        u (or where it would be); edges_start[n] == len(edges), so the edges
        leaving u are edges[edges_start[u]:edges_start[u+1]]
        neighbors: neighbors[u] lists every node adjacent to u in ascending
        order
        pops: population of each node, used to balance ReCom splits
        labels: original node label of each node index
        index: inverse of labels
        max_degree: largest len(neighbors[u])
        connected: whether the graph has a single connected component
    """

    n: int
    edges: list[Edge]
    edges_start: list[int]
    neighbors: list[list[int]]
    pops: list[int]
    total_pop: int
    labels: list[Hashable]
    index: dict[Hashable, int]
    max_degree: int
    connected: bool

    def __init__(self, n: int, edges: Iterable[tuple[int, int]], pops: Optional[list[int]] = None, labels: Optional[list[Hashable]] = None) -> None:
        if n < 1:
            raise ValueError("a graph needs at least one node, got n = %d" % n)
        if pops is not None and len(pops) != n:
            raise ValueError("expected %d populations but got %d" % (n, len(pops)))
        if labels is not None and len(labels) != n:
            raise ValueError("expected %d labels but got %d" % (n, len(labels)))

        normalized: set[Edge] = set()
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError("edge (%d, %d) has an endpoint outside of 0..%d" % (u, v, n))
            if u != v:
                normalized.add((min(u, v), max(u, v)))
        self.n = n
        self.edges = sorted(normalized)
        self.edges_start = [bisect_left(self.edges, (u,)) for u in range(n)] + [len(self.edges)]
        self.neighbors = [[] for _ in range(n)]
        for src, dst in self.edges:
            self.neighbors[src].append(dst)
            self.neighbors[dst].append(src)
        for adj in self.neighbors:
            adj.sort()
        self.max_degree = max(len(adj) for adj in self.neighbors)

        self.pops = list(pops) if pops is not None else [1] * n
        self.total_pop = sum(self.pops)
        self.labels = list(labels) if labels is not None else list(range(n))
        self.index = {label: node for node, label in enumerate(self.labels)}

        uf = UnionFind(n)
        for src, dst in self.edges:
            uf.union(src, dst)
        self.connected = uf.n_components() == 1

    @staticmethod
    def from_networkx(graph: nx.Graph, pop_col: Optional[str] = None) -> Graph:
        """Builds a Graph from a networkx (or gerrychain) graph, numbering nodes in iteration order."""

        return Graph.from_nodes(graph, list(graph.nodes), pop_col)

    @staticmethod
    def from_nodes(graph: Any, nodes: Iterable[Hashable], pop_col: Optional[str] = None) -> Graph:
        """
        Builds the subgraph of graph induced by nodes. graph only needs
        networkx-style nodes[...] and neighbors(...) accessors, so gerrychain's
        FrozenGraph works as well as nx.Graph.
        """

        labels: list[Hashable] = list(nodes)
        index: dict[Hashable, int] = {label: i for i, label in enumerate(labels)}
        edges: list[Edge] = [(index[u], index[v]) for u in labels for v in graph.neighbors(u) if v in index]
        pops = [graph.nodes[u][pop_col] for u in labels] if pop_col is not None else None
        return Graph(len(labels), edges, pops=pops, labels=labels)

    def edge_index(self, u: int, v: int) -> int:
        """Index of edge {u, v} in edges, or -1 if the nodes are not adjacent."""

        src, dst = min(u, v), max(u, v)
        lo, hi = self.edges_start[src], self.edges_start[src+1]
        idx = bisect_left(self.edges, (src, dst), lo, hi)
        if idx < hi and self.edges[idx][1] == dst:
            return idx
        return -1

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return "<%s [%d nodes, %d edges], max degree: %d>" % (self.__class__.__name__, self.n, len(self.edges), self.max_degree)


class SpanningTreeBuffer:
    """
    Reusable adjacency-list container for a sampled spanning tree. st[u]
    holds the neighbors of u within the tree. Samplers overwrite it on every
    call instead of allocating a new result.
    """

    st: list[list[int]]

    def __init__(self, n: int) -> None:
        self.st = [[] for _ in range(n)]

    def resize(self, n: int) -> None:
        if len(self.st) > n:
            del self.st[n:]
        while len(self.st) < n:
            self.st.append([])

    def clear(self) -> None:
        for adj in self.st:
            adj.clear()

    def edges(self) -> Iterator[Edge]:
        """Yields each tree edge once, as (u, v) with u < v."""

        for u, adj in enumerate(self.st):
            for v in adj:
                if u < v:
                    yield (u, v)

    def n_edges(self) -> int:
        return sum(len(adj) for adj in self.st) // 2

    def __len__(self) -> int:
        return len(self.st)

    def __repr__(self) -> str:
        return "<%s [%d nodes, %d edges]>" % (self.__class__.__name__, len(self.st), self.n_edges())
