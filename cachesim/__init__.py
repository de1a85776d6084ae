"""LRU set associative cache simulator for valgrind memory traces."""
from cachesim.cache import Cache, decode
from cachesim.simulator import SimulationState, access, simulate
