import numpy as np
import pytest


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.5)


@pytest.fixture
def make_fixed_rng():
    return FixedRandom


@pytest.fixture
def client():
    from bloomee.main import app

    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client
