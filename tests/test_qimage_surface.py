"""
Tests for QPainter rasterization, PNG export and SVG export.

Uses the pytest-qt ``qapp`` fixture for the Qt application QPainter needs.
"""
import json
import math
import pytest
from PIL import Image

from models.app_state import StyleSnapshot, SymmetryParams
from models.transform import AffineTransform, AffineTransformSet
from models.operations import LineOp
from services.file_operations import (
    export_png, export_svg, export_tile_png, export_tile_svg, tile_geometry,
)
from services.surfaces import QImageSurface, SvgSurface
from services.symmetry_transforms import identity_set

BLACK = StyleSnapshot(stroke_style='rgba(0, 0, 0, 1)', line_width=4.0)


def _alpha(surface, x, y):
    return int(surface.to_array()[y, x, 3])


# ══════════════════════════════════════════════════════════════════════════
# Painting
# ══════════════════════════════════════════════════════════════════════════

class TestPainting:

    def test_starts_transparent(self, qapp):
        surface = QImageSurface(20, 10)
        array = surface.to_array()
        assert array.shape == (10, 20, 4)
        assert array[..., 3].max() == 0

    def test_background_fill(self, qapp):
        surface = QImageSurface(8, 8, background='#ffffff')
        assert surface.to_array().min() == 255

    def test_stroke_painted(self, qapp):
        surface = QImageSurface(100, 100)
        surface.draw_path([['M', 10, 50], ['L', 90, 50]], BLACK, identity_set())
        assert _alpha(surface, 50, 50) > 0
        assert _alpha(surface, 50, 10) == 0

    def test_every_transform_painted(self, qapp):
        surface = QImageSurface(100, 100)
        transforms = AffineTransformSet([
            AffineTransform.identity(),
            AffineTransform.translation(0, 30),
        ])
        surface.draw_path([['M', 10, 20], ['L', 90, 20]], BLACK, transforms)
        assert _alpha(surface, 50, 20) > 0
        assert _alpha(surface, 50, 50) > 0

    def test_filled_circle(self, qapp):
        style = StyleSnapshot(fill_style='rgba(255, 0, 0, 1)')
        surface = QImageSurface(50, 50)
        surface.draw_circle((25, 25), 10, style, identity_set(), fill=True, stroke=False)
        r, g, b, a = surface.to_array()[25, 25]
        assert (r, g, b, a) == (255, 0, 0, 255)

    def test_view_transform(self, qapp):
        surface = QImageSurface(100, 100, view=AffineTransform.translation(0, 40))
        surface.draw_path([['M', 10, 10], ['L', 90, 10]], BLACK, identity_set())
        assert _alpha(surface, 50, 50) > 0
        assert _alpha(surface, 50, 10) == 0

    def test_clear(self, qapp):
        surface = QImageSurface(100, 100)
        surface.draw_path([['M', 10, 50], ['L', 90, 50]], BLACK, identity_set())
        surface.clear()
        assert surface.to_array()[..., 3].max() == 0

    def test_resize(self, qapp):
        surface = QImageSurface(10, 10)
        surface.resize(30, 20)
        assert surface.image.width() == 30
        assert surface.image.height() == 20


# ══════════════════════════════════════════════════════════════════════════
# Export
# ══════════════════════════════════════════════════════════════════════════

class TestExport:

    def test_save_png(self, qapp, tmp_path):
        surface = QImageSurface(64, 32)
        path = tmp_path / 'out' / 'image.png'
        assert surface.save_png(str(path)) == (64, 32)
        with Image.open(path) as img:
            assert img.size == (64, 32)
            assert img.mode == 'RGBA'

    def test_export_png(self, qapp, tmp_path, controller):
        op = controller.commit(LineOp((0, 0), (100, 100)))
        path = tmp_path / 'sketch.png'
        size = export_png([op], controller.transforms_for, 120, 90, str(path), background='#ffffff')
        assert size == (120, 90)

    @pytest.mark.parametrize("sym, expected", [
        ('p4', (20, 20)),
        ('p6', (20, round(math.sqrt(3) * 20))),
    ])
    def test_tile_size(self, sym, expected):
        width, height, _ = tile_geometry(SymmetryParams(sym=sym, d=10), pixel_scale=2)
        assert (width, height) == expected

    def test_tile_view_maps_center_to_origin(self):
        _, _, view = tile_geometry(SymmetryParams(sym='p4', x=300, y=200, d=10), pixel_scale=2)
        assert view.apply((300, 200)) == (0, 0)
        assert view.apply((310, 200)) == (20, 0)

    def test_export_tile_png(self, qapp, tmp_path):
        symmetry = SymmetryParams(sym='p4', x=0, y=0, d=10, nx=2, ny=2)
        op = LineOp((0, 0), (5, 5), style=BLACK, symmetry=symmetry)
        path = tmp_path / 'tile.png'
        from controller import SketchController
        from services.surfaces import RecordingSurface
        controller = SketchController(RecordingSurface())
        assert export_tile_png([op], controller.transforms_for, symmetry, str(path), pixel_scale=2) == (20, 20)


# ══════════════════════════════════════════════════════════════════════════
# SVG
# ══════════════════════════════════════════════════════════════════════════

class TestSvgExport:

    def test_export_svg_writes_paths(self, qapp, tmp_path, controller):
        op = controller.commit(LineOp((0, 0), (100, 100)))
        path = tmp_path / 'out' / 'sketch.svg'
        size = export_svg([op], controller.transforms_for, 120, 90, str(path))
        assert size == (120, 90)
        text = path.read_text()
        assert '<svg' in text
        assert '<path' in text

    def test_one_element_per_transform(self, qapp, tmp_path):
        path = tmp_path / 'copies.svg'
        transforms = AffineTransformSet([
            AffineTransform.identity(),
            AffineTransform.translation(0, 30),
            AffineTransform.translation(0, 60),
        ])
        surface = SvgSurface(str(path), 100, 100)
        surface.draw_path([['M', 10, 20], ['L', 90, 20]], BLACK, transforms)
        surface.finish()
        assert path.read_text().count('<path') >= 3

    def test_empty_export(self, qapp, tmp_path):
        path = tmp_path / 'empty.svg'
        assert SvgSurface(str(path), 40, 30).finish() == (40, 30)
        assert '<svg' in path.read_text()

    def test_clear_after_drawing_rejected(self, qapp, tmp_path):
        surface = SvgSurface(str(tmp_path / 'x.svg'), 50, 50)
        surface.clear()
        surface.draw_circle((25, 25), 10, BLACK, identity_set())
        with pytest.raises(RuntimeError):
            surface.clear()
        surface.finish()

    def test_export_tile_svg(self, qapp, tmp_path):
        symmetry = SymmetryParams(sym='p4', x=0, y=0, d=10, nx=2, ny=2)
        op = LineOp((0, 0), (5, 5), style=BLACK, symmetry=symmetry)
        path = tmp_path / 'tile.svg'
        from controller import SketchController
        from services.surfaces import RecordingSurface
        controller = SketchController(RecordingSurface())
        assert export_tile_svg([op], controller.transforms_for, symmetry, str(path), pixel_scale=2) == (20, 20)
        assert '<path' in path.read_text()


class TestHeadlessRender:

    def test_full_render(self, qapp, tmp_path, sample_sketch_json):
        from headless import render_sketch
        source = tmp_path / 'sketch.json'
        source.write_text(sample_sketch_json)
        out = tmp_path / 'sketch.png'
        assert render_sketch(str(source), str(out), size=(200, 100)) == (200, 100)
        assert out.exists()

    def test_tile_render_uses_newest_tiling(self, qapp, tmp_path, sample_sketch_json):
        from headless import render_sketch
        source = tmp_path / 'sketch.json'
        source.write_text(sample_sketch_json)
        out = tmp_path / 'tile.png'
        assert render_sketch(str(source), str(out), tile=True, pixel_scale=1) == (100, 100)

    def test_svg_render(self, qapp, tmp_path, sample_sketch_json):
        from headless import render_sketch
        source = tmp_path / 'sketch.json'
        source.write_text(sample_sketch_json)
        out = tmp_path / 'sketch.svg'
        assert render_sketch(str(source), str(out), size=(200, 100)) == (200, 100)
        assert '<path' in out.read_text()

    def test_tile_render_without_tiling(self, qapp, tmp_path):
        from headless import render_sketch
        source = tmp_path / 'plain.json'
        source.write_text(json.dumps([{"tool": "line", "start": [0, 0], "end": [5, 5]}]))
        with pytest.raises(ValueError):
            render_sketch(str(source), str(tmp_path / 'x.png'), tile=True)
