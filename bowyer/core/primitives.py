"""Point, Edge and Triangle value types.

``Point`` is an immutable record compared by coordinates only; its ``id``
slot is scratch space the engine fills on its own private copies. ``Edge``
is an unordered pair and ``Triangle`` a non-degenerate vertex triple with
derived edges. None of these hold references into caller data.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from . import geometry
from .config import get_precision
from .errors import DegenerateTriangle, InvalidInput

__all__ = ['Point', 'Edge', 'Triangle', 'as_point']


@dataclass(frozen=True)
class Point:
    """A planar point.

    Coordinates are coerced to the configured float width on construction.
    ``id`` does not take part in equality or hashing.
    """
    x: float
    y: float
    id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        scalar = get_precision().scalar
        try:
            object.__setattr__(self, 'x', scalar(self.x))
            object.__setattr__(self, 'y', scalar(self.y))
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"point coordinates must be numbers, got ({self.x!r}, {self.y!r})") from exc

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def with_id(self, id: Optional[int]) -> 'Point':
        return replace(self, id=id)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def dist2(self, other: 'Point'):
        return geometry.dist2(self, other)

    def dist(self, other: 'Point'):
        return geometry.dist(self, other)

    def is_in_circle(self, cx, cy, r) -> bool:
        return bool(geometry.is_in_circle(self, cx, cy, r))

    def describe(self) -> str:
        return f"Point ({self.id}) x: {self.x:.2f} y: {self.y:.2f}"


def as_point(obj) -> Point:
    """Return obj if it is a Point, else build one from an (x, y) pair."""
    if isinstance(obj, Point):
        return obj
    try:
        x, y = obj
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"expected a Point or an (x, y) pair, got {obj!r}") from exc
    return Point(x, y)


class Edge:
    """Unordered segment between two points; (a, b) equals (b, a)."""

    __slots__ = ('p1', 'p2')

    def __init__(self, p1, p2):
        self.p1 = as_point(p1)
        self.p2 = as_point(p2)

    def key(self) -> frozenset:
        return frozenset((self.p1, self.p2))

    def same(self, other: 'Edge') -> bool:
        return ((self.p1 == other.p1 and self.p2 == other.p2)
                or (self.p1 == other.p2 and self.p2 == other.p1))

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.same(other)

    def __hash__(self):
        return hash(self.key())

    def length(self):
        return geometry.dist(self.p1, self.p2)

    def midpoint(self) -> Tuple[float, float]:
        x = self.p1.x + (self.p2.x - self.p1.x) / 2
        y = self.p1.y + (self.p2.y - self.p1.y) / 2
        return x, y

    def __repr__(self):
        return f"Edge({self.p1!r}, {self.p2!r})"


class Triangle:
    """Triangle with vertices p1, p2, p3 and edges e1=p1p2, e2=p2p3, e3=p3p1.

    Raises DegenerateTriangle if the vertices are exactly collinear. The
    circumcircle is computed on first use and cached.
    """

    __slots__ = ('p1', 'p2', 'p3', 'e1', 'e2', 'e3', '_circle')

    def __init__(self, p1, p2, p3):
        p1, p2, p3 = as_point(p1), as_point(p2), as_point(p3)
        if geometry.is_flat_angle(p1, p2, p3):
            raise DegenerateTriangle(
                "angle (p1, p2, p3) is flat:\n  %s\n  %s\n  %s"
                % (p1.describe(), p2.describe(), p3.describe()),
                points=(p1, p2, p3))
        self.p1, self.p2, self.p3 = p1, p2, p3
        self.e1, self.e2, self.e3 = Edge(p1, p2), Edge(p2, p3), Edge(p3, p1)
        self._circle = None

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.p1, self.p2, self.p3)

    @property
    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (self.e1, self.e2, self.e3)

    def key(self) -> frozenset:
        """Structural identity: the unordered vertex triple."""
        return frozenset(self.vertices)

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def is_cw(self) -> bool:
        return geometry.cross_product(self.p1, self.p2, self.p3) < 0

    def is_ccw(self) -> bool:
        return geometry.cross_product(self.p1, self.p2, self.p3) > 0

    def sides_length(self):
        return self.e1.length(), self.e2.length(), self.e3.length()

    def center(self) -> Tuple[float, float]:
        """Centroid."""
        x = (self.p1.x + self.p2.x + self.p3.x) / 3
        y = (self.p1.y + self.p2.y + self.p3.y) / 3
        return x, y

    def circumcenter(self):
        return self.circumcircle()[:2]

    def circumradius(self):
        return self.circumcircle()[2]

    def circumcircle(self):
        """(cx, cy, r) of the circumscribed circle."""
        if self._circle is None:
            self._circle = geometry.circumcircle(self.p1, self.p2, self.p3)
        return self._circle

    def area(self):
        a, b, c = self.sides_length()
        return geometry.quat_cross(a, b, c) / 4

    def in_circumcircle(self, p) -> bool:
        cx, cy, r = self.circumcircle()
        return bool(geometry.is_in_circle(as_point(p), cx, cy, r))

    def __repr__(self):
        return f"Triangle({self.p1!r}, {self.p2!r}, {self.p3!r})"
