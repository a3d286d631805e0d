"""Transform data structures for coordinate and symmetry representation."""
import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair in canvas pixels: pointer positions,
    control points, handle locations.
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def distance_to(self, other) -> float:
        return math.hypot(self.x - other[0], self.y - other[1])


@dataclass(frozen=True)
class AffineTransform:
    """Planar affine map (x, y) -> (a*x + c*y + e, b*x + d*y + f).

    Coefficient order matches canvas/QTransform ``setTransform(a, b, c, d, e, f)``:
    (a, b) is the image of the x unit vector, (c, d) the image of the y unit
    vector and (e, f) the translation.
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    # ========================================
    # Constructors
    # ========================================

    @classmethod
    def identity(cls) -> 'AffineTransform':
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> 'AffineTransform':
        return cls(1.0, 0.0, 0.0, 1.0, float(tx), float(ty))

    @classmethod
    def rotation(cls, angle: float) -> 'AffineTransform':
        """Counter-clockwise rotation about the origin (radians)."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return cls(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

    @classmethod
    def reflection(cls, angle: float) -> 'AffineTransform':
        """Mirror across the line through the origin at ``angle`` (radians)."""
        cos_2a = math.cos(2 * angle)
        sin_2a = math.sin(2 * angle)
        return cls(cos_2a, sin_2a, sin_2a, -cos_2a, 0.0, 0.0)

    @classmethod
    def about(cls, transform: 'AffineTransform', x: float, y: float) -> 'AffineTransform':
        """Conjugate ``transform`` so that it acts about the point (x, y)."""
        return compose(cls.translation(x, y),
                       compose(transform, cls.translation(-x, -y)))

    # ========================================
    # Operations
    # ========================================

    def compose(self, other: 'AffineTransform') -> 'AffineTransform':
        """Return self ∘ other (apply ``other`` first, then ``self``)."""
        return AffineTransform(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.e + self.c * other.f + self.e,
            self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, point) -> Tuple[float, float]:
        x, y = point
        return (self.a * x + self.c * y + self.e,
                self.b * x + self.d * y + self.f)

    def determinant(self) -> float:
        """Determinant of the linear part (+1 rotations, -1 reflections)."""
        return self.a * self.d - self.b * self.c

    def inverse(self) -> 'AffineTransform':
        det = self.determinant()
        if det == 0:
            raise ValueError("Singular affine transform has no inverse")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return AffineTransform(a, b, c, d,
                               -(a * self.e + c * self.f),
                               -(b * self.e + d * self.f))

    def is_close(self, other: 'AffineTransform', tol: float = 1e-9) -> bool:
        return all(abs(p - q) <= tol for p, q in zip(self.as_tuple(), other.as_tuple()))

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def as_matrix(self) -> np.ndarray:
        """Homogeneous 3x3 matrix acting on column vectors (x, y, 1)."""
        return np.array([[self.a, self.c, self.e],
                         [self.b, self.d, self.f],
                         [0.0, 0.0, 1.0]])


def compose(first: AffineTransform, second: AffineTransform) -> AffineTransform:
    """compose(A, B) applies B then A."""
    return first.compose(second)


class AffineTransformSet:
    """Ordered, immutable, non-empty sequence of affine transforms.

    Produced by the symmetry generators for one parameter tuple and swapped
    in as a whole value whenever the symmetry parameters change.
    """

    __slots__ = ('_transforms',)

    def __init__(self, transforms: Sequence[AffineTransform]):
        transforms = tuple(transforms)
        if not transforms:
            raise ValueError("AffineTransformSet must contain at least one transform")
        self._transforms = transforms

    @property
    def transforms(self) -> Tuple[AffineTransform, ...]:
        return self._transforms

    def __len__(self) -> int:
        return len(self._transforms)

    def __iter__(self) -> Iterator[AffineTransform]:
        return iter(self._transforms)

    def __getitem__(self, index):
        return self._transforms[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, AffineTransformSet):
            return NotImplemented
        return self._transforms == other._transforms

    def __hash__(self) -> int:
        return hash(self._transforms)

    def __repr__(self) -> str:
        return f"AffineTransformSet({len(self._transforms)} transforms)"
