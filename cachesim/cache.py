import enum

from cachesim.config import ConfigError, MAX_ADDRESS_BITS


def decode(address, s, b):
    """Split an address into its tag and set index.

    The block offset (the low `b` bits) is dropped, no data is modelled.
    """
    setIndex = (address >> b) & ((1 << s) - 1)
    tag = address >> (s + b)
    return tag, setIndex


class Probe(enum.Enum):
    HIT = 1
    STALE = 2  # matching tag, line not valid
    NONE = 3


class Line:

    def __init__(self):
        self.valid = False
        self.tag = 0
        self.lastUsed = 0

    def __repr__(self):
        return "Line(valid=%s, tag=%#x, lastUsed=%d)" % (self.valid, self.tag, self.lastUsed)


class Cache:

    def __init__(self, s, E, b):
        """Set associative cache state, 2**s sets of E lines.

        Parameters
        ----------

        s (int):
            Number of set index bits.
        E (int):
            Number of lines per set (associativity).
        b (int):
            Number of block offset bits.
        """
        if s < 0 or b < 0:
            raise ConfigError("set and block bits must be non-negative (s=%d, b=%d)" % (s, b))
        if s + b > MAX_ADDRESS_BITS:
            raise ConfigError("s + b must not exceed %d address bits (got %d)" % (MAX_ADDRESS_BITS, s + b))
        if E < 1:
            raise ConfigError("lines per set must be positive (E=%d)" % E)

        self.setBits = s
        self.offsetBits = b
        self.associativity = E
        self.nSets = 1 << s

        self.sets = [[Line() for i in range(self.associativity)] for j in range(self.nSets)]

    def decode(self, address):
        return decode(address, self.setBits, self.offsetBits)

    def probe(self, setIndex, tag):
        """Look for `tag` in a set.

        Only the first line with a matching tag is considered. Returns a
        (Probe, way) pair, way is None for Probe.NONE.
        """
        for way, line in enumerate(self.sets[setIndex]):
            if line.tag == tag:
                if line.valid:
                    return Probe.HIT, way
                return Probe.STALE, way
        return Probe.NONE, None

    def firstEmpty(self, setIndex):
        """Lowest way in the set that has never been populated, or None."""
        for way, line in enumerate(self.sets[setIndex]):
            if not line.valid:
                return way
        return None

    def fill(self, setIndex, way, tag, now):
        line = self.sets[setIndex][way]
        line.valid = True
        line.tag = tag
        line.lastUsed = now

    def touch(self, setIndex, way, now):
        self.sets[setIndex][way].lastUsed = now
