#! /usr/bin/env python
from waysim.config import LABELS, WayPrediction


def rate(count, total):
    """Percentage of `count` in `total`, 0 when `total` is 0."""
    if total == 0:
        return 0.0
    return 100.0 * count / total


def info(cache):
    """Lines of the summary report for a cache that has run a trace."""
    lines = [
        "Block size: %d Bytes" % cache.cacheLine,
        "Assoc: %d-way" % cache.associativity,
        "Number of cacheline: %d" % (cache.nSets * cache.associativity),
        "Tag width: %d" % cache.tagBits,
        "Index width: %d" % cache.setBits,
        "Offset width: %d" % cache.offsetBits,
        "Write Hit Policy: %s" % LABELS[cache.writeHit],
        "Write Miss Policy: %s" % LABELS[cache.writeMiss],
        "Replacement Algorithm: %s" % LABELS[cache.replacement],
        "Way Prediction Algorithm: %s" % LABELS[cache.wayPrediction],
    ]
    if cache.victimCache is not None:
        lines.append("Victim Cache: %d entries" % cache.victimSize)
    else:
        lines.append("Victim Cache: None")

    n = cache.counter
    lines += [
        "Memory access: %d" % n,
        "Hit: %d" % cache.hit,
        "Hit Rate: %.2f%%" % rate(cache.hit, n),
        "Miss: %d" % cache.miss,
        "Miss Rate: %.2f%%" % rate(cache.miss, n),
    ]
    if cache.victimCache is not None:
        lines.append("Victim Cache Hit: %d" % cache.victimCache.hit)

    if cache.wayPrediction is not WayPrediction.NONE:
        lines += [
            "Way Prediction First Hit: %d" % cache.firstHit,
            "Way Prediction First Hit Rate: %.2f%%" % rate(cache.firstHit, cache.hit),
            "Way Prediction Non-First Hit: %d" % cache.nonFirstHit,
            "Way Prediction Non-First Hit Rate: %.2f%%" % rate(cache.nonFirstHit, cache.hit),
        ]
    if cache.wayPrediction is WayPrediction.MULTI_COLUMN:
        meanSearch = cache.searchLength / n if n else 0.0
        lines.append("Way Prediction Average Search Length: %.4f" % meanSearch)
    return lines


def writeInfo(cache, fp):
    for line in info(cache):
        fp.write(line + "\n")


def parseInfo(fp):
    """Read a report written by `writeInfo` back into a dict of label -> value.

    Numbers are converted (rates without their % sign), other values are
    kept as strings.
    """
    values = {}
    for line in fp:
        label, sep, value = line.partition(":")
        if not sep:
            continue
        value = value.strip()
        number = value.rstrip("%")
        try:
            values[label] = int(number)
        except ValueError:
            try:
                values[label] = float(number)
            except ValueError:
                values[label] = value
    return values
