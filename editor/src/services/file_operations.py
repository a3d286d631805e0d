"""
Eschersketch - File Operations Service

This module handles file I/O for sketches and PNG/SVG exports.
Separates file operations from UI logic.
"""

import logging

from constants import TILE_PIXEL_SCALE
from models.transform import AffineTransform, compose
from services.sketch_serializer import deserialize, serialize
from services.surfaces import QImageSurface, SvgSurface
from services.symmetry_transforms import get_symmetry_group

logger = logging.getLogger(__name__)


def save_sketch_to_file(ops, filename):
    """Save committed operations to a JSON sketch file

    Args:
        ops: Iterable of DrawOperation in commit order
        filename: Path to save file

    Raises:
        OSError: If file write fails
    """
    text = serialize(ops, indent=1)
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info(f"Sketch saved to {filename}")


def load_sketch_from_file(filename):
    """Load operations from a JSON sketch file

    Returns:
        List of DrawOperation

    Raises:
        OSError: If file read fails
        CorruptSketchError: If the file does not decode
    """
    with open(filename, 'r', encoding='utf-8') as f:
        text = f.read()
    ops = deserialize(text)
    logger.info(f"Sketch loaded from {filename} ({len(ops)} operations)")
    return ops


def read_sketch_text(filename):
    with open(filename, 'r', encoding='utf-8') as f:
        return f.read()


def render_ops(ops, surface, transforms_for):
    """Replay operations onto a surface

    Args:
        ops: Operations in commit order (already deduplicated)
        surface: Target Surface
        transforms_for: Callable mapping an op's SymmetryParams to its transform set
    """
    for op in ops:
        op.render(surface, transforms_for(op.symmetry))


def export_png(ops, transforms_for, width, height, filename, background=None):
    """Render operations at canvas size and write a PNG

    Returns:
        (width, height) of the written image
    """
    surface = QImageSurface(width, height, background=background)
    render_ops(ops, surface, transforms_for)
    return surface.save_png(filename)


def export_svg(ops, transforms_for, width, height, filename, background=None):
    """Render operations at canvas size and write an SVG

    Every transformed copy becomes its own SVG element, so large lattices give
    large files.

    Returns:
        (width, height) of the written document
    """
    surface = SvgSurface(filename, width, height, background=background)
    render_ops(ops, surface, transforms_for)
    return surface.finish()


def tile_geometry(symmetry, pixel_scale=TILE_PIXEL_SCALE):
    """Size and view transform of one repeating tile

    The tile is the catalog footprint scaled by the spacing, placed with its
    origin at the lattice center and magnified by pixel_scale.

    Args:
        symmetry: SymmetryParams with a tiling symmetry selected
        pixel_scale: Pixel density multiplier

    Returns:
        (width, height, view AffineTransform)

    Raises:
        UnknownSymmetryError: symmetry is not a tiling
    """
    spec = get_symmetry_group(symmetry.sym)
    tile_w, tile_h = spec.tile
    width = max(1, int(round(tile_w * symmetry.d * pixel_scale)))
    height = max(1, int(round(tile_h * symmetry.d * pixel_scale)))
    view = compose(
        AffineTransform(pixel_scale, 0, 0, pixel_scale, 0, 0),
        AffineTransform.translation(-symmetry.x, -symmetry.y),
    )
    return width, height, view


def export_tile_png(ops, transforms_for, symmetry, filename, pixel_scale=TILE_PIXEL_SCALE):
    """Render the repeating tile of the current tiling to a PNG

    Returns:
        (width, height) of the written image
    """
    width, height, view = tile_geometry(symmetry, pixel_scale)
    surface = QImageSurface(width, height, view=view)
    render_ops(ops, surface, transforms_for)
    logger.debug(f"Tile export {symmetry.sym} d={symmetry.d} -> {width}x{height}")
    return surface.save_png(filename)


def export_tile_svg(ops, transforms_for, symmetry, filename, pixel_scale=1):
    """Render the repeating tile of the current tiling to an SVG

    Returns:
        (width, height) of the written document
    """
    width, height, view = tile_geometry(symmetry, pixel_scale)
    surface = SvgSurface(filename, width, height, view=view)
    render_ops(ops, surface, transforms_for)
    logger.debug(f"Tile SVG export {symmetry.sym} d={symmetry.d} -> {width}x{height}")
    return surface.finish()
