#! /usr/bin/env python
import logging

from waysim.line import CacheLine
from waysim.lru import LRUState

logger = logging.getLogger(__name__)


class VictimCache:

    def __init__(self, nEntries):
        """Small fully associative buffer of lines evicted from a cache.

        Entries are tagged with the block address (address >> offsetBits),
        since a victim entry is not tied to a set of the primary cache.

        Parameters
        ----------

        nEntries (int):
            Number of entries, must be positive.
        """
        self.nEntries = nEntries
        self.entries = [CacheLine() for i in range(self.nEntries)]
        self.lru = LRUState(self.nEntries)
        self.hit = 0

    def find(self, blockAddr):
        """Slot holding `blockAddr`, or None."""
        for slot, entry in enumerate(self.entries):
            if entry.valid and entry.tag == blockAddr:
                return slot
        return None

    def invalidate(self, slot):
        self.entries[slot].invalidate()

    def insert(self, line, blockAddr, slot=None):
        """Store a copy of `line` under `blockAddr` and make it most recently used.

        Without `slot` the least recently used entry is replaced; whatever it
        held is dropped, there is no further level to write it back to.
        """
        if slot is None:
            slot = self.lru.victim()
        entry = self.entries[slot]
        if entry.valid:
            logger.debug("victim cache drops block %#x (dirty=%s)", entry.tag, entry.dirty)
        entry.fill(blockAddr, line.dirty)
        self.lru.hit(slot)
        return slot

    def check(self):
        tags = [e.tag for e in self.entries if e.valid]
        assert len(tags) == len(set(tags)), "duplicate tag in victim cache"
        assert self.lru.isPermutation(), "victim cache LRU is not a permutation"
