from random import Random
import consts
import logging
logger = logging.getLogger(__name__)


class RandomRangeBuffer:
    """
    Reservoir of pre-drawn random bytes for picking small uniform integers,
    used to choose neighbors during the random walks of Wilson's algorithm.
    Refilled from the caller's RNG in bulk when exhausted.

    Fields:
        buf: the reservoir
        idx: position of the next unused byte in buf
        size: number of bytes drawn per refill
    """

    buf: bytes
    idx: int
    size: int

    def __init__(self, rng: Random, size: int = consts.RANGE_BUF_SIZE) -> None:
        self.size = size
        self.refill(rng)

    def refill(self, rng: Random) -> None:
        self.buf = rng.randbytes(self.size)
        self.idx = 0

    def range(self, rng: Random, k: int) -> int:
        """
        Returns a uniform value in [0, k) for 1 <= k <= 256. Bytes at or
        above the largest multiple of k are skipped so every residue is
        equally likely.
        """

        if not 1 <= k <= consts.MAX_UST_DEGREE:
            raise ValueError("range bound must be between 1 and %d, got %d" % (consts.MAX_UST_DEGREE, k))
        limit = 256 - 256 % k
        while True:
            if self.idx >= self.size:
                logger.debug("random range buffer exhausted; drawing %d new bytes" % self.size)
                self.refill(rng)
            val = self.buf[self.idx]
            self.idx += 1
            if val < limit:
                return val % k


class USTBuffer:
    """
    Working state for Wilson's algorithm, reused across calls.

    Fields:
        in_tree: in_tree[u] is set once u has joined the tree
        next: successor of u on the last walk through u, or -1
        edges: indices (into Graph.edges) of the tree edges
    """

    in_tree: list[bool]
    next: list[int]
    edges: list[int]

    def __init__(self, n: int) -> None:
        self.in_tree = [False] * n
        self.next = [-1] * n
        self.edges = []

    def clear(self, n: int) -> None:
        if len(self.in_tree) != n:
            self.in_tree = [False] * n
            self.next = [-1] * n
        else:
            for u in range(n):
                self.in_tree[u] = False
                self.next[u] = -1
        self.edges.clear()
