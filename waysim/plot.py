#! /usr/bin/env python3
"""Bar charts of the .info files written by a sweep."""
import argparse
import os

import numpy as np
from matplotlib import pyplot as plt
from matplotlib.gridspec import GridSpec

from waysim.report import parseInfo


def loadInfo(paths):
    """Parse every .info file, returns (labels, list of dicts)."""
    labels = []
    infos = []
    for path in paths:
        with open(path) as fp:
            infos.append(parseInfo(fp))
        name = os.path.basename(path)
        if name.endswith(".info"):
            name = name[:-len(".info")]
        labels.append(name)
    return labels, infos


def rates(infos):
    """Array of (hit, miss, first hit, non-first hit) rates per report, in percent."""
    return np.asarray([[info.get("Hit Rate", 0.0),
                        info.get("Miss Rate", 0.0),
                        info.get("Way Prediction First Hit Rate", 0.0),
                        info.get("Way Prediction Non-First Hit Rate", 0.0)] for info in infos], dtype=float)


def plot(labels, infos):
    data = rates(infos)
    bar_width = 0.35
    index = np.arange(len(labels))
    gs = GridSpec(2, 1)

    ax = plt.subplot(gs[0, 0])
    ax.bar(index, data[:, 0], width=bar_width, color='C0', label='Hit')
    ax.bar(index + bar_width, data[:, 1], width=bar_width, color='C3', label='Miss')
    ax.set_ylabel("Rate (%)")
    ax.set_xticks((), ())
    ax.legend()

    ax = plt.subplot(gs[1, 0])
    ax.bar(index, data[:, 2], width=bar_width, color='C4', label='First hit')
    ax.bar(index + bar_width, data[:, 3], width=bar_width,
           color='C7', label='Non-first hit')
    ax.set_ylabel("Way prediction (% of hits)")
    ax.set_xticks(index + bar_width / 2)
    ax.set_xticklabels(labels, rotation=90, fontsize='small')
    ax.legend()
    plt.tight_layout()
    return ax.figure


def main(argv=None):
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("info", nargs="+", help=".info files")
    p.add_argument("-o", "--output", help="save the figure here instead of showing it")
    args = p.parse_args(argv)

    labels, infos = loadInfo(args.info)
    fig = plot(labels, infos)
    if args.output:
        fig.savefig(args.output)
    else:
        plt.show()
    return 0


if __name__ == '__main__':
    main()
