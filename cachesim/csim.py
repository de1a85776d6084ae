#! /usr/bin/env python3
import click

from cachesim.config import ConfigError, checkConfig
from cachesim.simulator import simulate
from cachesim.trace import readTrace

RESULTS_FILE = ".cachesim_results"

EXAMPLES = """\b
Examples:
  linux>  csim -s 4 -E 1 -b 4 -t traces/t1.trace
  linux>  csim -s 8 -E 2 -b 4 -t traces/t1.trace -v
"""


def printSummary(hits, misses, evictions, resultsFile=RESULTS_FILE):
    """Report the final counters, on stdout and in the results file."""
    click.echo("hits:%d misses:%d evictions:%d" % (hits, misses, evictions))
    with open(resultsFile, "w") as f:
        f.write("%d %d %d\n" % (hits, misses, evictions))


def run(s, E, b, traceFile, verbose=False, resultsFile=RESULTS_FILE):
    checkConfig(s, E, b, traceFile)
    records = readTrace(traceFile)
    if verbose:
        click.echo("simulation starting and reading from %s" % traceFile)
    state = simulate(records, s, E, b, verbose=verbose, echo=click.echo)
    printSummary(*state.counts(), resultsFile=resultsFile)
    return state


@click.command(epilog=EXAMPLES, context_settings={"help_option_names": ["-h", "--help"]})
@click.option('-s', 's', type=int, help='Number of set index bits.')
@click.option('-E', 'E', type=int, help='Number of lines per set.')
@click.option('-b', 'b', type=int, help='Number of block offset bits.')
@click.option('-t', 'traceFile', type=str, help='Trace filename.')
@click.option('-v', 'verbose', is_flag=True, help='Print verbose output.')
def main(s, E, b, traceFile, verbose):
    """Replay a valgrind memory trace against an LRU set associative cache."""
    try:
        run(s, E, b, traceFile, verbose)
    except ConfigError as e:
        raise click.UsageError(str(e))


if __name__ == '__main__':
    main()
