import matplotlib

matplotlib.use("Agg")

import pytest

from cachesim.trace import parseTrace


@pytest.fixture
def trace():
    def make(*lines):
        return list(parseTrace(lines))
    return make
