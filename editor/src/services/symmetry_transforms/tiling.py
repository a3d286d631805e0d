"""Lattice tiling generator.

Combines a catalog entry with placement parameters into the finite, ordered
set of affine maps that replicate a stroke over a bounded viewport.
"""

import math
from typing import List, Tuple

from constants import MIN_GRID_N, MIN_SPACING
from models.transform import AffineTransform, AffineTransformSet, compose
from .catalog import LatticeType, SymmetryGroupSpec

Vector = Tuple[float, float]


def lattice_vectors(spec: SymmetryGroupSpec, d: float) -> Tuple[Vector, Vector, Vector, Vector]:
    """Basis and conventional cell vectors for ``spec`` at spacing ``d``.

    Returns:
        (basis1, basis2, cell_u, cell_v). Lattice points are i*basis1 + j*basis2
        (plus basis1/2 on odd rows of a rhombic lattice); glide shifts are
        expressed along cell_u, cell_v.
    """
    w, h = spec.cell
    lattice = spec.lattice

    if lattice == LatticeType.SQUARE:
        b1, b2 = (d, 0.0), (0.0, d)
        return b1, b2, b1, b2
    if lattice == LatticeType.RECTANGULAR:
        b1, b2 = (w * d, 0.0), (0.0, h * d)
        return b1, b2, b1, b2
    if lattice == LatticeType.HEXAGONAL:
        b1, b2 = (d, 0.0), (d / 2.0, d * math.sqrt(3.0) / 2.0)
        return b1, b2, b1, b2
    if lattice == LatticeType.RHOMBIC:
        # Rows are half a conventional cell apart; odd rows shift by half a cell
        b1, b2 = (w * d, 0.0), (0.0, h * d / 2.0)
        return b1, b2, b1, (0.0, h * d)
    raise ValueError(f"Lattice type {lattice} cannot be tiled")


def lattice_points(spec: SymmetryGroupSpec, nx: int, ny: int, d: float) -> List[Vector]:
    """Enumerate lattice translations, i outer and j inner."""
    b1, b2, _, _ = lattice_vectors(spec, d)
    half_x = int(math.ceil(nx / 2.0))
    half_y = int(math.ceil(ny / 2.0))
    centered = spec.lattice == LatticeType.RHOMBIC

    points = []
    for i in range(-half_x, half_x + 1):
        for j in range(-half_y, half_y + 1):
            u = i + 0.5 if (centered and j % 2) else i
            points.append((u * b1[0] + j * b2[0], u * b1[1] + j * b2[1]))
    return points


def generate_tiling(spec: SymmetryGroupSpec, nx, ny, d, t, x, y) -> AffineTransformSet:
    """Generate the transform set tiling ``spec`` around (x, y).

    Args:
        spec: Catalog entry
        nx, ny: Approximate number of cells across / down (clamped to >= 1;
            callers bound the upper end, the cost is O(nx*ny*order))
        d: Lattice spacing (clamped to >= MIN_SPACING)
        t: Tilt of the whole lattice, degrees
        x, y: Tiling center

    Returns:
        AffineTransformSet where each element is F ∘ T(L(i,j)) ∘ P ∘ F⁻¹ with
        F = T(x, y) ∘ R(t). The element for lattice index (0, 0) and the
        identity operation is the identity.
    """
    nx = max(MIN_GRID_N, int(nx))
    ny = max(MIN_GRID_N, int(ny))
    d = max(MIN_SPACING, float(d))

    _, _, cell_u, cell_v = lattice_vectors(spec, d)

    # Glide shifts are given in cell fractions; move them into canvas units
    operations = []
    for op in spec.operations:
        shift_x = op.e * cell_u[0] + op.f * cell_v[0]
        shift_y = op.e * cell_u[1] + op.f * cell_v[1]
        operations.append(AffineTransform(op.a, op.b, op.c, op.d, shift_x, shift_y))

    frame = compose(AffineTransform.translation(x, y),
                    AffineTransform.rotation(math.radians(t)))
    frame_inverse = frame.inverse()

    transforms = []
    for tx, ty in lattice_points(spec, nx, ny, d):
        placed = compose(frame, AffineTransform.translation(tx, ty))
        for op in operations:
            transforms.append(compose(placed, compose(op, frame_inverse)))

    return AffineTransformSet(transforms)
