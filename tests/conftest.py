from pathlib import Path
import sys

import matplotlib
import pytest

# Ensure root directory is in path for config import
sys.path.insert(0, str(Path(__file__).parent.parent))

matplotlib.use("Agg")


class ScriptedRandom:
    """Random source that always returns the top of integer ranges,
    the bottom of float ranges and 0.0 for random()."""

    def integers(self, low, high=None, size=None):
        return high - 1

    def uniform(self, low=0.0, high=1.0, size=None):
        return low

    def random(self):
        return 0.0


@pytest.fixture
def scripted_rng():
    return ScriptedRandom()
