import matplotlib
import pytest

matplotlib.use("Agg")

from datacomm.core.config import clear_config  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts and ends without a global configuration."""
    clear_config()
    yield
    clear_config()


@pytest.fixture
def rng():
    import numpy as np

    return np.random.default_rng(1234)
