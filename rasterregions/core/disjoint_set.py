# -*- coding: utf-8 -*-
"""Disjoint-set forest used to merge provisional labels during region labeling.

Elements are grid coordinates, but any hashable value works. The forest uses path compression in find
and union by rank, which keeps a full labeling run close to linear in the number of pixels.
"""


class DisjointSet:
    """Union-find structure with path compression and union by rank."""

    def __init__(self):
        """Initialize an empty forest."""
        self.parent = {}
        self.rank = {}

    def __len__(self):
        """Number of registered elements."""
        return len(self.parent)

    def __contains__(self, x):
        """Whether x has been registered."""
        return x in self.parent

    def make_set(self, x):
        """Register x as a singleton set. Does nothing if x is already registered.

        Parameters:
        -----------
        x : hashable
            Element to register
        """
        if x in self.parent:
            return

        self.parent[x] = x
        self.rank[x] = 0

    def find(self, x):
        """Find the root of the set containing x.

        The root is located first without touching the forest, then every node on the path from x is
        re-pointed directly at it.

        Parameters:
        -----------
        x : hashable
            A registered element

        Returns:
        --------
        root : hashable
            Representative of the set containing x

        Raises:
        -------
        KeyError
            If x was never registered through make_set or union
        """
        if x not in self.parent:
            raise KeyError(f"Element {x!r} is not registered in the disjoint set")

        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        while self.parent[x] != root:
            parent = self.parent[x]
            self.parent[x] = root
            x = parent

        return root

    def union(self, x, y):
        """Merge the sets containing x and y, registering either one if needed.

        Parameters:
        -----------
        x, y : hashable
            Elements to merge

        Returns:
        --------
        merged : bool
            False if x and y were already in the same set
        """
        self.make_set(x)
        self.make_set(y)

        x = self.find(x)
        y = self.find(y)

        if x == y:
            return False

        # x always ends up as the root with the higher (or equal) rank
        if self.rank[x] < self.rank[y]:
            x, y = y, x

        self.parent[y] = x

        if self.rank[x] == self.rank[y]:
            self.rank[x] += 1

        return True

    def connected(self, x, y):
        """Whether x and y are registered and share a root."""
        if x not in self.parent or y not in self.parent:
            return False
        return self.find(x) == self.find(y)

    def groups(self):
        """Group all registered elements by root.

        Returns:
        --------
        groups : dict
            Mapping of root to the list of its members, in registration order
        """
        groups = {}
        for x in list(self.parent):
            groups.setdefault(self.find(x), []).append(x)
        return groups
