"""Public package API for bowyer, a Bowyer-Watson Delaunay triangulator.

This facade provides a flat import surface on top of the implementation
package ``bowyer.core``.

Example
-------
    from bowyer import triangulate, Point

    tris = triangulate([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])

The deeper modules (``bowyer.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
import logging as _logging

try:  # Python 3.8+ runtime version export
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("bowyer-delaunay")  # populated when installed
except _NotFound:  # pragma: no cover - source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core import geometry, conformity, constants  # noqa: E402
from .core.config import (  # noqa: E402
    PrecisionConfig, TriangulationConfig, get_precision, set_precision_mode, set_float_width,
    set_convex_multiplier, get_convex_multiplier,
)
from .core.conformity import check_delaunay, check_triangulation  # noqa: E402
from .core.errors import (  # noqa: E402
    DelaunayError, InvalidInput, DegenerateTriangle, InternalInconsistency, ConfigurationError,
)
from .core.logging_utils import configure_logging, get_logger  # noqa: E402
from .core.primitives import Point, Edge, Triangle  # noqa: E402
from .core.stats import TriangulationStats, format_stats  # noqa: E402
from .core.triangulation import triangulate, triangulate_indices, Delaunay  # noqa: E402
from .core.validation import validate_points  # noqa: E402

# Fine-grained geometry exports
cross_product = geometry.cross_product
is_flat_angle = geometry.is_flat_angle
DEFAULT_CONVEX_MULTIPLIER = constants.DEFAULT_CONVEX_MULTIPLIER

__all__ = [
    '__version__',
    # value types
    'Point', 'Edge', 'Triangle',
    # engine
    'triangulate', 'triangulate_indices', 'Delaunay',
    # configuration
    'PrecisionConfig', 'TriangulationConfig', 'get_precision', 'set_precision_mode',
    'set_float_width', 'set_convex_multiplier', 'get_convex_multiplier', 'DEFAULT_CONVEX_MULTIPLIER',
    # errors
    'DelaunayError', 'InvalidInput', 'DegenerateTriangle', 'InternalInconsistency', 'ConfigurationError',
    # checks
    'check_delaunay', 'check_triangulation', 'validate_points',
    # geometry predicates
    'cross_product', 'is_flat_angle',
    # logging / stats
    'configure_logging', 'get_logger', 'TriangulationStats', 'format_stats',
    # submodules
    'geometry', 'conformity', 'constants',
]
