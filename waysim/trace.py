#! /usr/bin/env python
"""Memory access traces.

A trace is a text file with one access per line: `r` or `w` followed by a
hexadecimal address, e.g.::

    r 0x7ffd3a1c
    w7ffd3a20
"""
import logging
from collections import namedtuple
from enum import Enum

logger = logging.getLogger(__name__)

ADDRESS_MASK = (1 << 64) - 1


class Kind(Enum):
    READ = "r"
    WRITE = "w"


Access = namedtuple("Access", ["kind", "addr"])


class TraceError(ValueError):
    """Raised for a malformed trace line."""

    def __init__(self, lineno, line, reason):
        super().__init__("line %d: %s: %r" % (lineno, reason, line))
        self.lineno = lineno
        self.line = line


def parseLine(line, lineno=0):
    """Parse one non-blank trace line into an Access."""
    text = line.strip()
    if not text:
        raise TraceError(lineno, line, "empty line")
    try:
        kind = Kind(text[0])
    except ValueError:
        raise TraceError(lineno, line, "invalid access kind") from None
    try:
        addr = int(text[1:].strip(), 16)
    except ValueError:
        raise TraceError(lineno, line, "invalid address") from None
    if addr < 0 or addr > ADDRESS_MASK:
        raise TraceError(lineno, line, "address does not fit 64 bits")
    return Access(kind, addr)


def readTrace(fp, nLines=-1, skip=0):
    """Read all accesses of the text stream `fp`.

    Parameters
    ----------
    fp (text file):
        The trace.
    nLines (int):
        Maximum number of accesses to return, -1 for all of them.
    skip (int):
        Number of leading accesses to drop.

    Returns a tuple of Access records.
    """
    accesses = []
    nRead = nWrite = 0
    seen = 0
    for lineno, line in enumerate(fp, 1):
        if not line.strip():
            continue
        access = parseLine(line, lineno)
        seen += 1
        if seen <= skip:
            continue
        accesses.append(access)
        if access.kind is Kind.READ:
            nRead += 1
        else:
            nWrite += 1
        if len(accesses) == nLines:
            break

    logger.info("Read %d entries: %d reads, %d writes", len(accesses), nRead, nWrite)
    return tuple(accesses)
