"""Random source handling for the jittered bloom functions."""

import numpy as np


def get_rng(rng=None):
    """
    Return the caller's random source, or a fresh unseeded generator.

    Any object with a ``random()`` method returning a float in [0, 1) is
    accepted, so tests can pass a seeded ``numpy.random.Generator`` or a stub.
    A new generator is created per call; nothing is shared between calls.
    """
    if rng is not None:
        return rng
    return np.random.default_rng()
