#! /usr/bin/env python3
"""Replay one trace through every combination of cache parameters.

Each configuration runs in its own thread with its own cache, and writes
<trace>_<block>_<replacement>_<prediction>_<victim>_<hit>_<miss>_<assoc>.trace
(one Hit/Miss line per access) and the matching .info summary.
"""
import argparse
import itertools
import logging
import os
import sys
import threading

from waysim.cache import Cache
from waysim.cacheMemTrace import associativity
from waysim.config import (CACHE_SIZE, Config, ConfigError, ReplacementAlgorithm, WayPrediction,
                           WriteHitPolicy, WriteMissPolicy)
from waysim.report import writeInfo
from waysim.trace import TraceError, readTrace

logger = logging.getLogger(__name__)


def configurations(blockSizes, assocs, replacements, predictions, victimSizes, hitPolicies, missPolicies):
    """Every combination of the given parameters, as Config records."""
    for values in itertools.product(blockSizes, replacements, predictions, victimSizes,
                                    hitPolicies, missPolicies, assocs):
        block, replacement, prediction, victim, hit, miss, assoc = values
        yield Config(cacheLine=block, associativity=assoc, replacement=replacement,
                     wayPrediction=prediction, victimSize=victim, writeHit=hit, writeMiss=miss)


def outputName(prefix, cache):
    return "%s_%d_%s_%s_%d_%s_%s_%d" % (prefix, cache.cacheLine, cache.replacement.value,
                                       cache.wayPrediction.value, cache.victimSize,
                                       cache.writeHit.value, cache.writeMiss.value, cache.associativity)


def simulate(cache, accesses, name):
    with open(name + ".trace", "w") as trace:
        cache.run(accesses, trace)
    with open(name + ".info", "w") as info:
        writeInfo(cache, info)


def sweep(accesses, configs, prefix, size=CACHE_SIZE):
    """Run every configuration of `configs` over `accesses`, one thread each.

    Configurations with an invalid geometry are skipped with a warning.
    Returns the list of (Config, Cache) that ran.
    """
    runs = []
    for config in configs:
        try:
            cache = Cache(size=size, **config._asdict())
        except ConfigError as e:
            logger.warning("skipping %s: %s", config, e)
            continue
        runs.append((config, cache))

    errors = []

    def worker(cache, name):
        try:
            simulate(cache, accesses, name)
        except Exception as e:
            errors.append((name, e))
            raise

    threads = []
    for config, cache in runs:
        name = outputName(prefix, cache)
        logger.info("Writing to %s.trace", name)
        t = threading.Thread(target=worker, args=(cache, name))
        t.start()
        threads.append(t)
    for t in threads:
        t.join()

    if errors:
        name, e = errors[0]
        raise RuntimeError("simulation %s failed" % name) from e
    logger.info("Finished %d configurations", len(runs))
    return runs


def parseArgs(argv=None):
    p = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("trace", help="trace file")
    p.add_argument("--outdir", help="directory of the output files (default: next to the trace)")
    p.add_argument("--size", type=int, default=CACHE_SIZE, help="cache size in bytes")
    p.add_argument("--block-sizes", nargs="+", type=int, default=[8, 32, 64])
    p.add_argument("--assocs", nargs="+", type=associativity, default=[-1, 1, 4, 8],
                   help="associativities, 'full' for fully associative")
    p.add_argument("--replacement", nargs="+", default=["lru"], choices=[m.value for m in ReplacementAlgorithm])
    p.add_argument("--predictions", nargs="+", default=["none"], choices=[m.value for m in WayPrediction])
    p.add_argument("--victim-sizes", nargs="+", type=int, default=[0])
    p.add_argument("--hit-policies", nargs="+", default=["writeback"], choices=[m.value for m in WriteHitPolicy])
    p.add_argument("--miss-policies", nargs="+", default=["allocate", "nonallocate"],
                   choices=[m.value for m in WriteMissPolicy])
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    logging.basicConfig(level=logging.INFO - 10 * min(args.verbose, 1),
                        format="%(levelname)s %(name)s: %(message)s")

    prefix = args.trace
    if args.outdir is not None:
        os.makedirs(args.outdir, exist_ok=True)
        prefix = os.path.join(args.outdir, os.path.basename(args.trace))

    try:
        with open(args.trace) as fp:
            accesses = readTrace(fp)
    except (OSError, TraceError) as e:
        print("error: %s" % e, file=sys.stderr)
        return 1

    configs = configurations(args.block_sizes, args.assocs, args.replacement, args.predictions,
                             args.victim_sizes, args.hit_policies, args.miss_policies)
    sweep(accesses, configs, prefix, args.size)
    return 0


if __name__ == '__main__':
    sys.exit(main())
