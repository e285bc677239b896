#! /usr/bin/env python
"""Configuration selectors and geometry validation for the cache model."""
from collections import namedtuple
from enum import Enum


class ConfigError(ValueError):
    """Raised when a cache configuration cannot be simulated."""


class ReplacementAlgorithm(Enum):
    LRU = "lru"


class WayPrediction(Enum):
    NONE = "none"
    MRU = "mru"
    MULTI_COLUMN = "multicolumn"


class WriteHitPolicy(Enum):
    WRITEBACK = "writeback"
    WRITETHROUGH = "writethrough"


class WriteMissPolicy(Enum):
    WRITE_ALLOCATE = "allocate"
    WRITE_NON_ALLOCATE = "nonallocate"


# Labels used in the .info report
LABELS = {
    ReplacementAlgorithm.LRU: "LRU",
    WayPrediction.NONE: "None",
    WayPrediction.MRU: "MRU",
    WayPrediction.MULTI_COLUMN: "MultiColumn",
    WriteHitPolicy.WRITEBACK: "Writeback",
    WriteHitPolicy.WRITETHROUGH: "Writethrough",
    WriteMissPolicy.WRITE_ALLOCATE: "Write Allocate",
    WriteMissPolicy.WRITE_NON_ALLOCATE: "Write Non-allocate",
}

# 512 kB
CACHE_SIZE = 512 * 1024

ADDRESS_BITS = 64


Config = namedtuple("Config", ["cacheLine", "associativity", "replacement", "wayPrediction",
                               "victimSize", "writeHit", "writeMiss"])


def parseChoice(enumType, value):
    """Return the `enumType` member named by `value`.

    `value` may already be a member, or one of the lower case labels
    ("lru", "mru", "writeback", ...).
    """
    if isinstance(value, enumType):
        return value
    try:
        return enumType(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enumType)
        raise ConfigError("unknown %s %r (expected one of: %s)"
                          % (enumType.__name__, value, choices)) from None


def log2(num, what="value"):
    """Exact base 2 logarithm of a power of two, ConfigError otherwise."""
    if not isinstance(num, int) or num <= 0 or num & (num - 1):
        raise ConfigError("%s must be a positive power of two, got %r" % (what, num))
    return num.bit_length() - 1
