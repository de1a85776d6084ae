#! /usr/bin/env python3
import re
import sys

import click
import numpy as np
from matplotlib import pyplot as plt
from matplotlib.gridspec import GridSpec

from cachesim.config import ConfigError
from cachesim.simulator import simulate
from cachesim.trace import readTrace

SUMMARY_RE = re.compile(r"hits:(\d+) misses:(\d+) evictions:(\d+)")


def parseSummaries(lines):
    """Collect `hits:<n> misses:<n> evictions:<n>` lines into an (n, 3) array.

    Anything else in the input (verbose output, blank lines) is ignored.
    """
    rows = []
    for line in lines:
        match = SUMMARY_RE.search(line)
        if match:
            rows.append([int(x) for x in match.groups()])
    return np.asarray(rows, dtype=np.int64).reshape(-1, 3)


def parseConfig(text):
    """'s,E,b' -> (s, E, b)"""
    s, E, b = (int(x) for x in text.split(','))
    return s, E, b


def sweep(records, configs):
    """Replay the same records through each (s, E, b) design.

    Returns an (n, 3) array of hits, misses and evictions, one row per
    design, in the order given.
    """
    records = list(records)
    counts = np.zeros((len(configs), 3), dtype=np.int64)
    for i, (s, E, b) in enumerate(configs):
        counts[i] = simulate(records, s, E, b).counts()
    return counts


def missRates(counts):
    counts = np.asarray(counts)
    accesses = counts[:, 0] + counts[:, 1]
    rates = np.zeros(len(counts))
    np.divide(counts[:, 1], accesses, out=rates, where=accesses > 0)
    return rates


def plotCounts(counts, labels, output=None):
    counts = np.asarray(counts)
    index = np.arange(len(counts))
    bar_width = 0.25
    gs = GridSpec(2, 1)

    fig = plt.figure()
    ax = fig.add_subplot(gs[0, 0])
    ax.bar(index, counts[:, 0], width=bar_width, color='C0', label='Hits')
    ax.bar(index + bar_width, counts[:, 1], width=bar_width, color='C1', label='Misses')
    ax.bar(index + 2*bar_width, counts[:, 2], width=bar_width, color='C3', label='Evictions')
    ax.set_ylabel("Accesses")
    ax.set_xticks(())
    ax.legend()

    ax = fig.add_subplot(gs[1, 0])
    ax.bar(index + bar_width, missRates(counts) * 100, width=bar_width, color='C1')
    ax.set_ylabel("Miss rate (%)")
    ax.set_xticks(index + bar_width)
    ax.set_xticklabels(labels)

    if output is None:
        plt.show()
    else:
        fig.savefig(output)
    plt.close(fig)
    return fig


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option('-t', 'traceFile', type=str, help='Trace to sweep, otherwise summaries are read from stdin.')
@click.option('-c', 'configs', multiple=True, help='Cache design as s,E,b, may be repeated.')
@click.option('-o', 'output', type=str, help='Save the figure instead of showing it.')
@click.argument('labels', nargs=-1)
def main(traceFile, configs, output, labels):
    """Compare cache designs by hits, misses and evictions."""
    if traceFile is not None:
        if not configs:
            raise click.UsageError("-t needs at least one -c s,E,b design")
        try:
            designs = [parseConfig(c) for c in configs]
        except ValueError:
            raise click.UsageError("designs are written s,E,b, got %s" % ", ".join(configs))
        try:
            counts = sweep(readTrace(traceFile), designs)
        except ConfigError as e:
            raise click.UsageError(str(e))
        if not labels:
            labels = configs
    else:
        counts = parseSummaries(sys.stdin)
        if not labels:
            labels = [str(i) for i in range(len(counts))]

    if len(labels) != len(counts):
        raise click.UsageError("%d labels for %d results" % (len(labels), len(counts)))
    for label, (hits, misses, evictions) in zip(labels, counts):
        click.echo("%s hits:%d misses:%d evictions:%d" % (label, hits, misses, evictions))
    plotCounts(counts, labels, output)


if __name__ == '__main__':
    main()
