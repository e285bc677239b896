#! /usr/bin/env python3
"""Replay a memory trace through one cache configuration and print its statistics."""
import argparse
import logging
import sys

from waysim.cache import Cache
from waysim.config import CACHE_SIZE, ConfigError, WayPrediction, WriteHitPolicy, WriteMissPolicy
from waysim.report import writeInfo
from waysim.trace import TraceError, readTrace


def associativity(value):
    if value == "full":
        return -1
    return int(value)


def parseArgs(argv=None):
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("trace", nargs="?", type=argparse.FileType("r"), default=sys.stdin,
                   help="trace file (default: stdin)")
    p.add_argument("--size", type=int, default=CACHE_SIZE, help="cache size in bytes")
    p.add_argument("--block-size", type=int, default=64, help="cache line size in bytes")
    p.add_argument("--assoc", type=associativity, default=8, help="ways per set, 'full' for fully associative")
    p.add_argument("--replacement", default="lru", choices=["lru"])
    p.add_argument("--prediction", default="none", choices=[m.value for m in WayPrediction])
    p.add_argument("--victim-size", type=int, default=0, help="victim cache entries, 0 disables it")
    p.add_argument("--hit-policy", default="writeback", choices=[m.value for m in WriteHitPolicy])
    p.add_argument("--miss-policy", default="allocate", choices=[m.value for m in WriteMissPolicy])
    p.add_argument("--lines", type=int, default=-1, help="number of accesses to replay, -1 for all")
    p.add_argument("--skip", type=int, default=0, help="number of leading accesses to skip")
    p.add_argument("--trace-out", type=argparse.FileType("w"), help="write a Hit/Miss line per access here")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    logging.basicConfig(level=logging.WARNING - 10 * min(args.verbose, 2),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        cache = Cache(size=args.size, associativity=args.assoc, cacheLine=args.block_size,
                      replacement=args.replacement, wayPrediction=args.prediction,
                      victimSize=args.victim_size, writeHit=args.hit_policy, writeMiss=args.miss_policy)
        accesses = readTrace(args.trace, args.lines, args.skip)
    except (ConfigError, TraceError) as e:
        print("error: %s" % e, file=sys.stderr)
        return 1

    cache.run(accesses, args.trace_out)
    if args.trace_out is not None:
        args.trace_out.close()
    writeInfo(cache, sys.stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
