"""Disjoint-set forest over string identifiers."""


class UnionFind:
    """Union-find with path compression and union by rank.

    Unknown identifiers are registered on first sight, so ``find`` and
    ``union`` never fail.
    """

    def __init__(self) -> None:
        self._parent: dict[str, str] = {}
        self._rank: dict[str, int] = {}

    def __contains__(self, x: str) -> bool:
        return x in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def make_set(self, x: str) -> None:
        if x not in self._parent:
            self._parent[x] = x
            self._rank[x] = 0

    def find(self, x: str) -> str:
        self.make_set(x)
        parent = self._parent[x]
        if parent != x:
            self._parent[x] = self.find(parent)
        return self._parent[x]

    def union(self, x: str, y: str) -> None:
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return

        rank_x = self._rank[root_x]
        rank_y = self._rank[root_y]
        if rank_x < rank_y:
            self._parent[root_x] = root_y
        elif rank_x > rank_y:
            self._parent[root_y] = root_x
        else:
            self._parent[root_y] = root_x
            self._rank[root_x] = rank_x + 1

    def get_clusters(self) -> dict[str, list[str]]:
        """Map each root to its members, members in registration order."""
        clusters: dict[str, list[str]] = {}
        for x in list(self._parent):
            clusters.setdefault(self.find(x), []).append(x)
        return clusters
