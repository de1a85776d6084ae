import os
import re
from collections import namedtuple

from cachesim.config import ConfigError, MAX_ADDRESS_BITS

# text is the record as written in the trace, used for verbose output
Record = namedtuple("Record", ["op", "address", "size", "text"], defaults=(None,))

# " L 7ff0005c8,8" as written by valgrind --tool=lackey, the address may
# carry a 0x prefix and the size may be preceded by blanks
RECORD_RE = re.compile(r"^\s*(\S)\s+(?:0[xX])?([0-9a-fA-F]+),\s*(\d+)\s*$")


def parseRecord(line):
    """Parse one trace line into a Record, None if the line is malformed."""
    match = RECORD_RE.match(line)
    if not match:
        return None
    op, address, size = match.groups()
    address = int(address, 16)
    if address >> MAX_ADDRESS_BITS:
        return None
    return Record(op, address, int(size), line.strip())


def parseTrace(lines):
    for line in lines:
        yield parseRecord(line)


def readTrace(path):
    """Records of a trace file, malformed lines come through as None.

    An unreadable trace is reported here, before any record is simulated.
    Bytes that are not valid text only spoil their own line.
    """
    if not os.path.isfile(path) or not os.access(path, os.R_OK):
        raise ConfigError("Cannot open trace file %s" % path)
    return _records(path)


def _records(path):
    with open(path, "r", errors="replace") as f:
        yield from parseTrace(f)
