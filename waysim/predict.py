#! /usr/bin/env python


class MultiColumnState:
    """Multi-column way prediction metadata for one set.

    One bit vector per column (a column is a way index used as the major
    location of the tags with `tag & (nWays - 1)` equal to it). Bit k of a
    column's vector is set when way k was last placed through that column.
    """

    def __init__(self, nWays):
        self.nWays = nWays
        self.bitVec = [0] * nWays

    def searchLength(self, major, last=None):
        """Number of ways a sequential scan of `major`'s vector visits.

        The scan covers ways 0..last inclusive (every way when `last` is
        None) and never counts the major location itself, which has already
        been probed as the first guess.
        """
        if last is None:
            last = self.nWays - 1
        vec = self.bitVec[major] & ~(1 << major)
        return bin(vec & ((1 << (last + 1)) - 1)).count("1")

    def place(self, way, major):
        """Record that `way` now belongs to column `major`."""
        mask = ~(1 << way)
        for column in range(self.nWays):
            self.bitVec[column] &= mask
        self.bitVec[major] |= 1 << way

    def columnsOf(self, way):
        return [c for c in range(self.nWays) if self.bitVec[c] >> way & 1]

    def __repr__(self):
        return "MultiColumnState(%s)" % ", ".join(bin(v) for v in self.bitVec)
