"""Catalog of the planar symmetry groups available for tiling.

The 17 wallpaper groups are the only distinct ways to tile the plane with a
repeating pattern. Each entry pairs a lattice type with the group's point
operations:
- Rotations about the origin by multiples of 2π/n (n = 1, 2, 3, 4, 6)
- Reflections across lines through the origin
- Glide reflections (reflection + fractional cell shift)

Groups by lattice type:
- Square: p1, p2, p4, p4m, p4g
- Rectangular: pm, pg, pmm, pmg, pgg
  (catalog entries use a unit cell, so both sides equal the spacing d; the
  lattice code honours any (w, h) cell given to a SymmetryGroupSpec)
- Rhombic (centered): cm, cmm
- Hexagonal: p3, p3m1, p31m, p6, p6m

Two extra entries, "diagonalgrid" and "hexgrid", carry a lattice with only the
identity operation. They give the user alignment guides, not replication by a
point group.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from models.transform import AffineTransform


class UnknownSymmetryError(KeyError):
    """Raised for a symmetry group name outside the catalog."""


class LatticeType(Enum):
    NONE = "none"
    RECTANGULAR = "rectangular"
    RHOMBIC = "rhombic"
    SQUARE = "square"
    HEXAGONAL = "hexagonal"


@dataclass(frozen=True)
class SymmetryGroupSpec:
    """Immutable definition of one tiling symmetry.

    ``operations`` are affine maps whose linear part is the point-group
    element about the origin and whose translation is a shift in fractions of
    the conventional cell (non-zero only for glides). ``cell`` and ``tile``
    are multiples of the lattice spacing d.
    """
    name: str
    lattice: LatticeType
    operations: Tuple[AffineTransform, ...]
    cell: Tuple[float, float] = (1.0, 1.0)
    tile: Tuple[float, float] = (1.0, 1.0)
    description: str = ""

    @property
    def order(self) -> int:
        """Number of point-group operations."""
        return len(self.operations)


# ======================================================================
# Operation helpers (angles in degrees)
# ======================================================================

_I = AffineTransform.identity()


def _rot(degrees: float) -> AffineTransform:
    return _clean(AffineTransform.rotation(math.radians(degrees)))


def _mirror(degrees: float, shift_u: float = 0.0, shift_v: float = 0.0) -> AffineTransform:
    m = _clean(AffineTransform.reflection(math.radians(degrees)))
    return AffineTransform(m.a, m.b, m.c, m.d, shift_u, shift_v)


def _rotations(n: int):
    return tuple(_rot(k * 360.0 / n) for k in range(n))


def _clean(t: AffineTransform) -> AffineTransform:
    """Snap floating noise so right-angle operations are exact."""
    def snap(v):
        r = round(v)
        return float(r) if abs(v - r) < 1e-12 else v
    return AffineTransform(*(snap(v) for v in t.as_tuple()))


_SQRT3 = math.sqrt(3.0)

_P4 = _rotations(4)
_P3 = _rotations(3)
_P6 = _rotations(6)


# ======================================================================
# Catalog
# ======================================================================

PLANAR_SYMMETRIES: Dict[str, SymmetryGroupSpec] = {
    # Rotation free
    "p1": SymmetryGroupSpec(
        "p1", LatticeType.SQUARE, (_I,),
        description="Only translations, no point symmetry"),
    "diagonalgrid": SymmetryGroupSpec(
        "diagonalgrid", LatticeType.RHOMBIC, (_I,),
        description="Diagonal alignment grid"),
    "pm": SymmetryGroupSpec(
        "pm", LatticeType.RECTANGULAR, (_I, _mirror(90)),
        description="Parallel reflection axes"),
    "cm": SymmetryGroupSpec(
        "cm", LatticeType.RHOMBIC, (_I, _mirror(90)),
        description="Reflection axes with glides between"),
    "pg": SymmetryGroupSpec(
        "pg", LatticeType.RECTANGULAR, (_I, _mirror(90, 0.0, 0.5)),
        description="Parallel glide reflections"),

    # 180 degree containing
    "pmg": SymmetryGroupSpec(
        "pmg", LatticeType.RECTANGULAR,
        (_I, _rot(180), _mirror(90, 0.5, 0.0), _mirror(0, 0.5, 0.0)),
        description="Reflection + perpendicular glide"),
    "pgg": SymmetryGroupSpec(
        "pgg", LatticeType.RECTANGULAR,
        (_I, _rot(180), _mirror(90, 0.5, 0.5), _mirror(0, 0.5, 0.5)),
        description="Perpendicular glide reflections"),
    "pmm": SymmetryGroupSpec(
        "pmm", LatticeType.RECTANGULAR,
        (_I, _rot(180), _mirror(90), _mirror(0)),
        description="Perpendicular reflection axes"),
    "p2": SymmetryGroupSpec(
        "p2", LatticeType.SQUARE, (_I, _rot(180)),
        description="180° rotation centers"),
    "cmm": SymmetryGroupSpec(
        "cmm", LatticeType.RHOMBIC,
        (_I, _rot(180), _mirror(90), _mirror(0)),
        description="Centered cell with perpendicular reflections"),

    # Square
    "p4": SymmetryGroupSpec(
        "p4", LatticeType.SQUARE, _P4,
        description="90° rotation centers"),
    "p4g": SymmetryGroupSpec(
        "p4g", LatticeType.SQUARE,
        _P4 + (_mirror(0, 0.5, 0.5), _mirror(90, 0.5, 0.5),
               _mirror(45, 0.5, 0.5), _mirror(135, 0.5, 0.5)),
        description="90° rotations with glides at 45°"),
    "p4m": SymmetryGroupSpec(
        "p4m", LatticeType.SQUARE,
        _P4 + (_mirror(0), _mirror(45), _mirror(90), _mirror(135)),
        description="Square with reflections on all axes"),

    # Hexagonal
    "hexgrid": SymmetryGroupSpec(
        "hexgrid", LatticeType.HEXAGONAL, (_I,),
        tile=(1.0, _SQRT3),
        description="Hexagonal alignment grid"),
    "p3": SymmetryGroupSpec(
        "p3", LatticeType.HEXAGONAL, _P3,
        tile=(1.0, _SQRT3),
        description="120° rotation centers"),
    "p6": SymmetryGroupSpec(
        "p6", LatticeType.HEXAGONAL, _P6,
        tile=(1.0, _SQRT3),
        description="60° rotation centers"),
    "p31m": SymmetryGroupSpec(
        "p31m", LatticeType.HEXAGONAL,
        _P3 + (_mirror(0), _mirror(60), _mirror(120)),
        tile=(1.0, _SQRT3),
        description="120° rotations, reflection axes between rotation centers"),
    "p3m1": SymmetryGroupSpec(
        "p3m1", LatticeType.HEXAGONAL,
        _P3 + (_mirror(30), _mirror(90), _mirror(150)),
        tile=(1.0, _SQRT3),
        description="120° rotations, reflection axes through rotation centers"),
    "p6m": SymmetryGroupSpec(
        "p6m", LatticeType.HEXAGONAL,
        _P6 + tuple(_mirror(k * 30) for k in range(6)),
        tile=(1.0, _SQRT3),
        description="Hexagonal with all symmetries"),
}


def get_symmetry_group(name: str) -> SymmetryGroupSpec:
    """Look up a catalog entry.

    Raises:
        UnknownSymmetryError: ``name`` is not one of the 19 tiling symmetries
    """
    try:
        return PLANAR_SYMMETRIES[name]
    except KeyError:
        raise UnknownSymmetryError(name) from None
