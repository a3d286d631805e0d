"""Symmetry transform engine.

Generates the finite, ordered sets of affine maps that replicate every
stroke under a chosen planar symmetry: lattice tilings for the wallpaper
groups and alignment grids, rosettes about one center, or the identity.
"""

from .catalog import (
    PLANAR_SYMMETRIES, LatticeType, SymmetryGroupSpec,
    UnknownSymmetryError, get_symmetry_group,
)
from .tiling import generate_tiling, lattice_points, lattice_vectors
from .rosette import generate_rosette, identity_set
from .transform_cache import TransformCache

# Process default cache for callers that do not own one
_DEFAULT_CACHE = TransformCache()


def generate_symmetry(group_name, nx, ny, d, t, x, y):
    """Tiling transform set for a catalog group, memoized.

    Args:
        group_name: Catalog name (e.g. "p4m", "hexgrid")
        nx, ny: Grid extent in cells
        d: Lattice spacing
        t: Lattice tilt in degrees
        x, y: Tiling center

    Returns:
        AffineTransformSet

    Raises:
        UnknownSymmetryError: ``group_name`` is not a tiling symmetry
    """
    return _DEFAULT_CACHE.get(group_name, nx, ny, d, t, x, y)


def get_available_symmetries():
    """Get list of catalog symmetries.

    Returns:
        List of (name, description) tuples
    """
    return [(name, spec.description) for name, spec in PLANAR_SYMMETRIES.items()]


__all__ = [
    'PLANAR_SYMMETRIES', 'LatticeType', 'SymmetryGroupSpec',
    'UnknownSymmetryError', 'get_symmetry_group',
    'generate_tiling', 'lattice_points', 'lattice_vectors',
    'generate_rosette', 'identity_set',
    'TransformCache', 'generate_symmetry', 'get_available_symmetries',
]
