#! /usr/bin/env python
import logging

from waysim.config import (ADDRESS_BITS, CACHE_SIZE, ConfigError, ReplacementAlgorithm, WayPrediction,
                           WriteHitPolicy, WriteMissPolicy, log2, parseChoice)
from waysim.line import CacheLine
from waysim.lru import LRUState
from waysim.predict import MultiColumnState
from waysim.trace import Kind
from waysim.victim import VictimCache

logger = logging.getLogger(__name__)


class Cache:

    def __init__(self, size=CACHE_SIZE, associativity=8, cacheLine=64,
                 replacement=ReplacementAlgorithm.LRU, wayPrediction=WayPrediction.NONE, victimSize=0,
                 writeHit=WriteHitPolicy.WRITEBACK, writeMiss=WriteMissPolicy.WRITE_ALLOCATE):
        """Set associative cache model with way prediction and a victim cache.

        Only the metadata (valid, dirty, tag) of each line is tracked.

        Parameters
        ----------

        size (int):
            Cache size in bytes. (Default 0x80000 (512 kB))
        associativity (int):
            Number of ways per set, -1 for fully associative.
        cacheLine (int):
            Number of bytes per cache line, determines the number of offset bits.
        replacement (ReplacementAlgorithm or str):
            Replacement algorithm, only LRU.
        wayPrediction (WayPrediction or str):
            NONE, MRU or MULTI_COLUMN.
        victimSize (int):
            Number of victim cache entries, 0 disables the victim cache.
        writeHit (WriteHitPolicy or str):
            WRITEBACK marks lines dirty on a write hit, WRITETHROUGH does not.
        writeMiss (WriteMissPolicy or str):
            WRITE_ALLOCATE installs the line on a write miss, WRITE_NON_ALLOCATE bypasses the cache.

        Every size must be a power of two, otherwise ConfigError is raised.
        """
        self.size = size
        self.associativity = associativity
        self.cacheLine = cacheLine
        self.victimSize = victimSize

        self.replacement = parseChoice(ReplacementAlgorithm, replacement)
        self.wayPrediction = parseChoice(WayPrediction, wayPrediction)
        self.writeHit = parseChoice(WriteHitPolicy, writeHit)
        self.writeMiss = parseChoice(WriteMissPolicy, writeMiss)

        log2(self.size, "cache size")
        self.offsetBits = log2(self.cacheLine, "cache line size")
        if self.cacheLine > self.size:
            raise ConfigError("cache line size %d exceeds cache size %d" % (self.cacheLine, self.size))

        self.nLines = self.size // self.cacheLine

        if self.associativity == -1:
            self.associativity = self.nLines

        self.wayBits = log2(self.associativity, "associativity")
        if self.associativity > self.nLines:
            raise ConfigError("associativity %d exceeds the %d lines of the cache"
                              % (self.associativity, self.nLines))

        self.nSets = self.nLines // self.associativity

        self.setBits = log2(self.nSets, "number of sets")
        self.tagBits = ADDRESS_BITS - self.setBits - self.offsetBits

        # nSets * associativity lines, set s occupies [s * associativity, (s + 1) * associativity)
        self.lines = [CacheLine() for i in range(self.nLines)]

        if self.replacement is ReplacementAlgorithm.LRU:
            self.lruState = [LRUState(self.associativity) for i in range(self.nSets)]
        else:
            raise ConfigError("unsupported replacement algorithm %s" % self.replacement)

        self.mruState = None
        self.multiColumnState = None
        if self.wayPrediction is WayPrediction.MRU:
            self.mruState = [0] * self.nSets
        elif self.wayPrediction is WayPrediction.MULTI_COLUMN:
            self.multiColumnState = [MultiColumnState(self.associativity) for i in range(self.nSets)]
        elif self.wayPrediction is not WayPrediction.NONE:
            raise ConfigError("unsupported way prediction algorithm %s" % self.wayPrediction)

        self.victimCache = None
        if self.victimSize:
            log2(self.victimSize, "victim cache size")
            self.victimCache = VictimCache(self.victimSize)

        self.counter = 0
        self.hit = 0
        self.miss = 0
        self.firstHit = 0
        self.searchLength = 0

    @property
    def nonFirstHit(self):
        return self.hit - self.firstHit

    def decode(self, address):
        """Split `address` into (tag, setIndex, offset)."""
        offset = address & (self.cacheLine - 1)
        setIndex = (address >> self.offsetBits) & (self.nSets - 1)
        tag = address >> self.offsetBits >> self.setBits
        return tag, setIndex, offset

    def majorLocation(self, tag):
        return tag & (self.associativity - 1)

    def blockAddress(self, tag, setIndex):
        """Address of a line without its offset bits, as stored in the victim cache."""
        return (tag << self.setBits) | setIndex

    def line(self, setIndex, way):
        return self.lines[setIndex * self.associativity + way]

    def findWay(self, setIndex, tag):
        """Way of the valid line tagged `tag` in the set, or None."""
        base = setIndex * self.associativity
        for way in range(self.associativity):
            line = self.lines[base + way]
            if line.valid and line.tag == tag:
                return way
        return None

    def selectVictim(self, setIndex):
        """Choose the way to replace and mark it most recently used."""
        lru = self.lruState[setIndex]
        way = lru.victim()
        lru.hit(way)
        return way

    def swapWays(self, setIndex, a, b):
        """Exchange two lines of a set, their recency moves with them."""
        self.line(setIndex, a).swap(self.line(setIndex, b))
        self.lruState[setIndex].swap(a, b)

    def access(self, access):
        """Apply one trace record, return True on a hit."""
        self.counter += 1
        if access.kind is Kind.WRITE:
            return self.write(access.addr)
        return self.read(access.addr)

    def run(self, accesses, trace=None):
        """Apply `accesses` in order.

        Parameters
        ----------
        accesses (iterable of Access):
            The records to replay.
        trace (text file):
            If given, one "Hit at"/"Miss at" line is written per record.
        """
        debug = logger.isEnabledFor(logging.DEBUG)
        for access in accesses:
            hit = self.access(access)
            if trace is not None:
                trace.write("%s at 0x%08x\n" % ("Hit" if hit else "Miss", access.addr))
            if debug:
                logger.debug("%s %#x: %s", access.kind.name, access.addr, "hit" if hit else "miss")
        assert self.hit + self.miss == self.counter, \
            "hits (%d) + misses (%d) != accesses (%d)" % (self.hit, self.miss, self.counter)
        return self

    def read(self, address):
        """Read `address`, filling the line on a miss. Returns True on a hit.

        A hit in the victim cache counts as a hit and moves the line back
        into the cache.
        """
        tag, setIndex, _ = self.decode(address)

        way = self.findWay(setIndex, tag)
        if way is not None:
            self.hit += 1
            self.lruState[setIndex].hit(way)
            self.predictHit(setIndex, tag, way)
            return True

        if self.victimCache is not None:
            slot = self.victimCache.find(address >> self.offsetBits)
            if slot is not None:
                self.hit += 1
                self.promote(setIndex, tag, slot)
                return True

        self.miss += 1
        self.allocate(setIndex, tag)
        return False

    def write(self, address):
        """Write `address` according to the write hit and write miss policies.

        Hits and allocations go through `read`, which does all the counting
        for them.
        """
        tag, setIndex, _ = self.decode(address)

        way = self.findWay(setIndex, tag)
        inVictim = False
        if self.victimCache is not None:
            inVictim = self.victimCache.find(address >> self.offsetBits) is not None
        assert way is None or not inVictim, "%#x is in both the cache and the victim cache" % address

        if way is not None or inVictim:
            if way is not None and self.writeHit is WriteHitPolicy.WRITEBACK:
                self.line(setIndex, way).dirty = True
            self.read(address)
            if inVictim and self.writeHit is WriteHitPolicy.WRITEBACK:
                self.markDirty(setIndex, tag)
            return True

        if self.writeMiss is WriteMissPolicy.WRITE_NON_ALLOCATE:
            self.miss += 1
            return False

        self.read(address)
        if self.writeHit is WriteHitPolicy.WRITEBACK:
            self.markDirty(setIndex, tag)
        return False

    def markDirty(self, setIndex, tag):
        way = self.findWay(setIndex, tag)
        assert way is not None, "tag %#x not resident in set %d" % (tag, setIndex)
        self.line(setIndex, way).dirty = True

    def predictHit(self, setIndex, tag, way):
        if self.wayPrediction is WayPrediction.MRU:
            if way == self.mruState[setIndex]:
                self.firstHit += 1
            self.mruState[setIndex] = way
        elif self.wayPrediction is WayPrediction.MULTI_COLUMN:
            major = self.majorLocation(tag)
            if way == major:
                self.firstHit += 1
                return
            self.swapWays(setIndex, way, major)
            self.searchLength += self.multiColumnState[setIndex].searchLength(major, way)

    def promote(self, setIndex, tag, slot):
        """Move victim cache entry `slot` back into the set.

        The line it replaces, if valid, takes over the freed slot.
        """
        victimCache = self.victimCache
        victimCache.hit += 1
        victimCache.invalidate(slot)

        way = self.selectVictim(setIndex)
        line = self.line(setIndex, way)
        if line.valid:
            victimCache.insert(line, self.blockAddress(line.tag, setIndex), slot)
        line.fill(tag)

    def allocate(self, setIndex, tag):
        """Install `tag` after a miss, demoting the replaced line to the victim cache."""
        way = self.selectVictim(setIndex)
        line = self.line(setIndex, way)
        if line.valid:
            logger.debug("evict tag %#x from set %d way %d (dirty=%s)", line.tag, setIndex, way, line.dirty)
            if self.victimCache is not None:
                self.victimCache.insert(line, self.blockAddress(line.tag, setIndex))

        if self.wayPrediction is WayPrediction.MULTI_COLUMN:
            major = self.majorLocation(tag)
            state = self.multiColumnState[setIndex]
            self.searchLength += state.searchLength(major)
            line.fill(tag)
            state.place(way, major)
            if way != major:
                self.swapWays(setIndex, way, major)
            return

        line.fill(tag)
        if self.wayPrediction is WayPrediction.MRU:
            self.mruState[setIndex] = way

    def check(self):
        """Assert the structural invariants of every set."""
        for setIndex in range(self.nSets):
            assert self.lruState[setIndex].isPermutation(), "LRU state of set %d is not a permutation" % setIndex
            base = setIndex * self.associativity
            tags = [line.tag for line in self.lines[base:base + self.associativity] if line.valid]
            assert len(tags) == len(set(tags)), "duplicate tag in set %d" % setIndex
            if self.multiColumnState is not None:
                state = self.multiColumnState[setIndex]
                for way in range(self.associativity):
                    assert len(state.columnsOf(way)) <= 1, \
                        "way %d in several columns of set %d" % (way, setIndex)
        if self.victimCache is not None:
            self.victimCache.check()
