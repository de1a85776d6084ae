import enum

from cachesim.cache import Cache, Probe
from cachesim.lru import selectVictim

LOAD = 'L'
STORE = 'S'
MODIFY = 'M'
DATA_OPS = (LOAD, STORE, MODIFY)


class Result(enum.Enum):
    HIT = "hit"
    MISS = "miss"
    MISS_EVICTION = "miss eviction"


class SimulationState:

    def __init__(self, cache):
        """Cache contents plus the counters of one run.

        `clock` is a logical timestamp, the first access happens at 1 so
        that 0 always means a line was never used.
        """
        self.cache = cache
        self.clock = 0
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def counts(self):
        return self.hits, self.misses, self.evictions


def _lookup(state, setIndex, tag):
    cache = state.cache
    status, way = cache.probe(setIndex, tag)

    if status is Probe.HIT:
        state.hits += 1
        cache.touch(setIndex, way, state.clock)
        return Result.HIT

    state.misses += 1
    if status is Probe.STALE:
        cache.fill(setIndex, way, tag, state.clock)
        return Result.MISS

    way = cache.firstEmpty(setIndex)
    if way is not None:
        cache.fill(setIndex, way, tag, state.clock)
        return Result.MISS

    way = selectVictim(cache.sets[setIndex])
    state.evictions += 1
    cache.fill(setIndex, way, tag, state.clock)
    return Result.MISS_EVICTION


def access(state, op, address):
    """Replay one trace record against the cache.

    Parameters
    ----------

    state (SimulationState):
        The run being simulated, updated in place.
    op (str):
        'L', 'S' or 'M'. Anything else (instruction fetches included) is
        ignored and leaves the state untouched.
    address (int):
        The data address.

    Returns a tuple of Result, one per cache access made: a modify is a
    load followed by a store to the same address and yields two, the second
    always a hit at the same clock tick.
    """
    if op not in DATA_OPS:
        return ()

    state.clock += 1
    tag, setIndex = state.cache.decode(address)
    first = _lookup(state, setIndex, tag)
    if op != MODIFY:
        return (first,)

    second = _lookup(state, setIndex, tag)
    return (first, second)


def simulate(records, s, E, b, verbose=False, echo=print):
    """Run a full trace through a freshly allocated cache.

    `records` is any iterable of trace records (see cachesim.trace), None
    entries stand for malformed lines and are skipped.
    """
    state = SimulationState(Cache(s, E, b))
    for record in records:
        if record is None:
            continue
        results = access(state, record.op, record.address)
        if verbose and results:
            text = record.text or "%s %x,%d" % (record.op, record.address, record.size)
            echo("%s %s" % (text, " ".join(r.value for r in results)))
    return state
