"""Headless sketch renderer - CLI entry point.

Reads a saved Eschersketch JSON file and renders it to PNG, either the full
canvas or the single repeating tile of a tiling symmetry. An output name
ending in .svg writes SVG instead.

Usage:
    python -m editor.src.headless <sketch.json> [-o OUTPUT] [--tile] [--size W H]

Examples:
    python -m editor.src.headless drawing.json
    python -m editor.src.headless drawing.json -o renders/drawing.png --size 1600 1200
    python -m editor.src.headless drawing.json --tile --pixel-scale 2
    python -m editor.src.headless drawing.json -o drawing.svg
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from constants import CANVAS_WIDTH, CANVAS_HEIGHT, NO_SYMMETRY, ROSETTE_SYMMETRY, TILE_PIXEL_SCALE

logger = logging.getLogger(__name__)


def _ensure_qapp():
    """Return existing Qt application or create a headless one."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt5.QtGui import QGuiApplication
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication(sys.argv[:1])
    return app


def _tile_symmetry(ops):
    """Symmetry of the newest operation drawn with a tiling, or None."""
    for op in reversed(ops):
        if op.symmetry is not None and op.symmetry.sym not in (NO_SYMMETRY, ROSETTE_SYMMETRY):
            return op.symmetry
    return None


def render_sketch(input_path, output_path, tile=False, size=(CANVAS_WIDTH, CANVAS_HEIGHT),
                  pixel_scale=TILE_PIXEL_SCALE, background=None):
    """Render a sketch file to PNG, or to SVG for a .svg output path.

    Returns:
        (width, height) of the written image

    Raises:
        CorruptSketchError: input does not decode
        ValueError: tile requested but no operation uses a tiling symmetry
    """
    from controller import SketchController
    from services.surfaces import RecordingSurface
    from services.file_operations import (
        load_sketch_from_file, export_png, export_svg, export_tile_png, export_tile_svg,
    )

    ops = load_sketch_from_file(input_path)

    # Controller only supplies replay order and cached transform sets here
    controller = SketchController(RecordingSurface(*size), startup_ops=ops)
    visible = controller.history.visible_ops()

    _ensure_qapp()
    as_svg = output_path.lower().endswith('.svg')
    if tile:
        symmetry = _tile_symmetry(ops)
        if symmetry is None:
            raise ValueError("No operation in this sketch uses a tiling symmetry")
        if as_svg:
            return export_tile_svg(visible, controller.transforms_for, symmetry, output_path, pixel_scale)
        return export_tile_png(visible, controller.transforms_for, symmetry, output_path, pixel_scale)
    if as_svg:
        return export_svg(visible, controller.transforms_for, size[0], size[1], output_path, background)
    return export_png(visible, controller.transforms_for, size[0], size[1], output_path, background)


def main():
    parser = argparse.ArgumentParser(
        description='Render Eschersketch JSON sketches to PNG or SVG without opening the editor.',
    )
    parser.add_argument(
        'input_file',
        help='Sketch JSON file saved by the editor.',
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output PNG or SVG path (default: input name with .png).',
    )
    parser.add_argument(
        '--tile',
        action='store_true',
        help='Render only the repeating tile of the sketch symmetry.',
    )
    parser.add_argument(
        '--size',
        nargs=2, type=int, metavar=('W', 'H'),
        default=(CANVAS_WIDTH, CANVAS_HEIGHT),
        help='Canvas size for full renders.',
    )
    parser.add_argument(
        '--pixel-scale',
        type=int, default=TILE_PIXEL_SCALE,
        help='Pixel density multiplier for tile renders.',
    )
    parser.add_argument(
        '--background',
        default=None,
        help="Background color for full renders, e.g. '#ffffff' (default: transparent).",
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    input_path = args.input_file
    if not os.path.isfile(input_path):
        print(f"Error: input file not found: {input_path}")
        sys.exit(1)

    output_path = args.output or os.path.splitext(input_path)[0] + ('_tile.png' if args.tile else '.png')

    try:
        width, height = render_sketch(
            input_path, output_path, tile=args.tile, size=tuple(args.size),
            pixel_scale=args.pixel_scale, background=args.background,
        )
    except ValueError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    print(f"Rendered {width}x{height} image to {output_path}")


if __name__ == '__main__':
    main()
