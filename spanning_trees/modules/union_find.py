from disjoint_set import DisjointSet


class UnionFind:
    """
    Disjoint-set forest over the nodes 0..n of a Graph. Wraps
    disjoint_set.DisjointSet and counts the successful unions so Kruskal's
    algorithm can tell when it has found n-1 tree edges.
    """

    ds: DisjointSet
    n: int
    unions: int

    def __init__(self, n: int) -> None:
        self.reset(n)

    def reset(self, n: int) -> None:
        """Drops all unions and starts over with n singleton sets."""

        self.ds = DisjointSet()
        for node in range(n):
            self.ds.find(node)
        self.n = n
        self.unions = 0

    def unioned(self, a: int, b: int) -> bool:
        return self.ds.connected(a, b)

    def union(self, a: int, b: int) -> bool:
        if self.ds.connected(a, b):
            return False
        self.ds.union(a, b)
        self.unions += 1
        return True

    def n_components(self) -> int:
        return self.n - self.unions

    def __repr__(self) -> str:
        return "<%s [%d nodes, %d unions]>" % (self.__class__.__name__, self.n, self.unions)
