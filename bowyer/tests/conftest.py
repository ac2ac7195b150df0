import logging

import numpy as np
import pytest

from bowyer.core import config as _config


@pytest.fixture(autouse=True)
def reset_precision():
    """Precision is set-once per process; give every test a fresh, unlocked default."""
    _config._reset_precision()
    yield
    _config._reset_precision()


@pytest.fixture(autouse=True)
def isolate_bowyer_logger():
    """configure_logging() installs handlers and disables propagation; undo it."""
    log = logging.getLogger('bowyer')
    handlers, level, propagate = list(log.handlers), log.level, log.propagate
    yield
    log.handlers[:] = handlers
    log.setLevel(level)
    log.propagate = propagate


def random_disk_points(n, seed=0, radius=1.0):
    """n points uniformly distributed in a disk (general position with probability 1)."""
    rng = np.random.default_rng(seed)
    r = radius * np.sqrt(rng.random(n))
    t = 2.0 * np.pi * rng.random(n)
    return np.column_stack((r * np.cos(t), r * np.sin(t)))


@pytest.fixture
def disk_points():
    return random_disk_points(60, seed=7)
