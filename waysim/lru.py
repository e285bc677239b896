#! /usr/bin/env python


class LRUState:
    """Recency stack for one set.

    `order` holds way indices from most recently used to least recently
    used. It starts as n-1, ..., 1, 0 so that an empty set fills from way 0.
    """

    def __init__(self, nWays):
        self.nWays = nWays
        self.order = list(range(nWays - 1, -1, -1))

    def victim(self):
        """The least recently used way. Does not modify the stack."""
        return self.order[-1]

    def hit(self, way):
        """Move `way` to the front, keeping the relative order of the rest."""
        self.order.remove(way)
        self.order.insert(0, way)

    def swap(self, a, b):
        """Exchange the positions of ways `a` and `b`.

        Used when way prediction physically relocates two lines of a set,
        so the recency of each line follows it to its new way.
        """
        assert 0 <= a < self.nWays and 0 <= b < self.nWays and a != b
        i = self.order.index(a)
        j = self.order.index(b)
        self.order[i], self.order[j] = b, a

    def isPermutation(self):
        return sorted(self.order) == list(range(self.nWays))

    def __repr__(self):
        return "LRUState(%r)" % (self.order,)
