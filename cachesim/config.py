import os

MAX_ADDRESS_BITS = 64


class ConfigError(Exception):
    """Invalid cache parameters or trace source, raised before simulating."""


def checkConfig(s, E, b, traceFile):
    """Validate the command line parameters of a run.

    All of s, E, b and the trace file are required, the three numbers must
    be positive and the set and block bits must fit in a 64 bit address.
    """
    missing = [name for name, value in (("-s", s), ("-E", E), ("-b", b), ("-t", traceFile))
               if value is None]
    if missing:
        raise ConfigError("Missing required command line argument: %s" % ", ".join(missing))

    for name, value in (("s", s), ("E", E), ("b", b)):
        if value <= 0:
            raise ConfigError("%s must be positive, got %d" % (name, value))

    if s + b > MAX_ADDRESS_BITS:
        raise ConfigError("s + b must not exceed %d, got %d" % (MAX_ADDRESS_BITS, s + b))

    if not os.path.isfile(traceFile):
        raise ConfigError("Cannot open trace file %s" % traceFile)
