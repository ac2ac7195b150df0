"""Configuration for bowyer: process-wide precision plus per-call knobs.

The precision (float width and compact vs boxed layout) is global and
set-once: it may be changed freely until the first triangulation runs,
after which it is locked for the lifetime of the process. Mixing widths
within one run is not supported.
"""
from __future__ import annotations

import math
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

import numpy as np

from .constants import DEFAULT_CONVEX_MULTIPLIER, FLOAT_WIDTHS
from .errors import ConfigurationError
from .logging_utils import get_logger

logger = get_logger('bowyer.config')


@dataclass(frozen=True)
class PrecisionConfig:
    """Float width and memory layout used by every triangulation.

    Attributes
    ----------
    float_bits : int
        32 or 64. Coordinates are stored as ``numpy.float32`` scalars for 32
        and Python ``float`` for 64. Predicates always evaluate in double
        precision on the stored values.
    compact_layout : bool
        True runs the engine over contiguous numpy arrays (vectorized cavity
        search, cached circumcircles); False over ``Point``/``Triangle``
        objects. Results are identical, only speed and memory differ.
    """
    float_bits: int = 64
    compact_layout: bool = False

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.float32 if self.float_bits == 32 else np.float64)

    @property
    def scalar(self) -> Callable[[Any], Any]:
        """Constructor coercing a number to the configured width."""
        return np.float32 if self.float_bits == 32 else float


_PRECISION = PrecisionConfig()
_LOCKED = False
_LOCK = threading.Lock()

# Read once per triangulate() call; change via set_convex_multiplier().
CONVEX_MULTIPLIER: float = DEFAULT_CONVEX_MULTIPLIER


def get_precision() -> PrecisionConfig:
    return _PRECISION


def is_locked() -> bool:
    return _LOCKED


def _set_precision(**changes) -> PrecisionConfig:
    global _PRECISION
    with _LOCK:
        new = replace(_PRECISION, **changes)
        if new == _PRECISION:
            return _PRECISION
        if _LOCKED:
            raise ConfigurationError(
                f"precision is locked after first use (current {_PRECISION}, requested {new})")
        _PRECISION = new
    logger.debug("precision set to %s", new)
    return new


def set_precision_mode(use_compact_layout: bool) -> PrecisionConfig:
    """Select the compact (numpy array) or boxed (object) engine layout.

    Must be called before the first triangulation; repeating the current
    value is a no-op even after the lock.
    """
    return _set_precision(compact_layout=bool(use_compact_layout))


def set_float_width(bits: int) -> PrecisionConfig:
    """Select 32- or 64-bit coordinate storage (before first use)."""
    if bits not in FLOAT_WIDTHS:
        raise ConfigurationError(f"float width must be one of {FLOAT_WIDTHS}, got {bits!r}")
    return _set_precision(float_bits=int(bits))


def lock_precision() -> PrecisionConfig:
    """Freeze the precision configuration; called by the engine on entry."""
    global _LOCKED
    with _LOCK:
        if not _LOCKED:
            _LOCKED = True
            logger.debug("precision locked: %s", _PRECISION)
        return _PRECISION


def _reset_precision() -> None:
    """Restore defaults and unlock. Test-suite hook only."""
    global _PRECISION, _LOCKED, CONVEX_MULTIPLIER
    with _LOCK:
        _PRECISION = PrecisionConfig()
        _LOCKED = False
        CONVEX_MULTIPLIER = DEFAULT_CONVEX_MULTIPLIER


def _check_multiplier(value) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"convex multiplier must be a positive finite number, got {value!r}")
    return value


def set_convex_multiplier(value: float) -> None:
    """Set the module-level super-triangle scale used by subsequent calls."""
    global CONVEX_MULTIPLIER
    CONVEX_MULTIPLIER = _check_multiplier(value)


def get_convex_multiplier() -> float:
    return CONVEX_MULTIPLIER


@dataclass
class TriangulationConfig:
    """Per-call options for triangulate().

    Attributes
    ----------
    convex_multiplier : float, optional
        Super-triangle scale; None reads the module-level setting.
    validate : bool
        Run the distinctness / collinearity pre-pass before building.
    collect_stats : bool
        Fill a TriangulationStats even when the caller did not pass one.
    log_progress_every : int
        Emit a DEBUG progress line every this many insertions (0 = never).
    """
    convex_multiplier: Optional[float] = None
    validate: bool = False
    collect_stats: bool = False
    log_progress_every: int = 0

    def resolved_multiplier(self) -> float:
        if self.convex_multiplier is None:
            return CONVEX_MULTIPLIER
        return _check_multiplier(self.convex_multiplier)

    def with_overrides(self, **overrides) -> 'TriangulationConfig':
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


__all__ = [
    'PrecisionConfig', 'TriangulationConfig',
    'get_precision', 'set_precision_mode', 'set_float_width', 'lock_precision', 'is_locked',
    'set_convex_multiplier', 'get_convex_multiplier', 'CONVEX_MULTIPLIER',
]
