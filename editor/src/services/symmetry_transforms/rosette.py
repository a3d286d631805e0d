"""Rosette (dihedral) symmetry about a single center - no lattice."""

import math

from constants import MIN_ROSETTE_ROTATIONS
from models.transform import AffineTransform, AffineTransformSet, compose


def generate_rosette(n_rot, n_ref, x, y, rot) -> AffineTransformSet:
    """Rotational copies about (x, y) with optional mirrored copies.

    Args:
        n_rot: Number of rotations (clamped to >= 1)
        n_ref: Mirror toggle - any value > 0 adds one reflected copy per rotation
        x, y: Rosette center
        rot: Angular offset in radians; also the angle of the mirror axis

    Returns:
        n_rot rotations by k*2π/n_rot + rot, followed (when n_ref > 0) by the
        same rotations each applied after the mirror across the axis at ``rot``.
    """
    n_rot = max(MIN_ROSETTE_ROTATIONS, int(n_rot))

    rotations = []
    for k in range(n_rot):
        angle = k * 2.0 * math.pi / n_rot + rot
        rotations.append(AffineTransform.about(AffineTransform.rotation(angle), x, y))

    transforms = list(rotations)
    if n_ref > 0:
        mirror = AffineTransform.about(AffineTransform.reflection(rot), x, y)
        transforms.extend(compose(r, mirror) for r in rotations)

    return AffineTransformSet(transforms)


def identity_set() -> AffineTransformSet:
    """Single identity transform, used for "no symmetry"."""
    return AffineTransformSet([AffineTransform.identity()])
