"""
Shared fixtures for Eschersketch tests.

Provides recording surfaces, a controller wired to them, and sample sketch
documents.
"""
import sys
import os
import json
import pytest

# Qt must not try to open a display during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Sample sketch documents ─────────────────────────────────────────────

_STYLE = {
    "stroke_style": "rgba(10, 20, 30, 1)",
    "fill_style": "rgba(200, 100, 100, 0.5)",
    "line_width": 2.0,
    "line_cap": "round",
    "line_join": "round",
    "miter_limit": 10.0,
}

_SYMMETRY = {
    "sym": "p4", "x": 0.0, "y": 0.0, "d": 100.0, "t": 0.0,
    "nx": 2, "ny": 2, "n_rot": 3, "n_ref": 0, "rot": 0.0,
}

SAMPLE_SKETCH = [
    {"tool": "line", "start": [0, 0], "end": [40, 10],
     "style": _STYLE, "symmetry": _SYMMETRY, "shape_id": "line-1"},
    {"tool": "pencil", "points": [[1, 1], [2, 3], [5, 8]],
     "style": _STYLE, "symmetry": None, "shape_id": "pencil-1"},
    {"tool": "circle", "center": [10, 10], "radius": 5,
     "style": _STYLE, "symmetry": dict(_SYMMETRY, sym="rosette", n_rot=6),
     "shape_id": "circle-1"},
    {"tool": "poly", "points": [[0, 0], [30, 0], [30, 30]],
     "style": _STYLE, "symmetry": dict(_SYMMETRY, sym="none"), "shape_id": "poly-1"},
    {"tool": "bezier", "segments": [["M", 0, 0], ["C", 10, 0, 20, 10, 30, 30], ["L", 40, 0]],
     "style": _STYLE, "symmetry": _SYMMETRY, "shape_id": "path-1"},
]


@pytest.fixture
def sample_sketch_json():
    """Sketch document with one operation of every kind"""
    return json.dumps(SAMPLE_SKETCH)


@pytest.fixture
def surface():
    """Recording surface for committed operations"""
    from services.surfaces import RecordingSurface
    return RecordingSurface(800, 600)


@pytest.fixture
def live_surface():
    """Recording surface for the live preview"""
    from services.surfaces import RecordingSurface
    return RecordingSurface(800, 600)


@pytest.fixture
def controller(surface, live_surface):
    """Controller with in-memory config on an 800x600 canvas"""
    from controller import SketchController
    return SketchController(surface, live_surface)


@pytest.fixture
def small_p4(controller):
    """Controller switched to a 3x3 p4 lattice centered at the origin"""
    controller.update_symmetry(sym='p4', nx=2, ny=2, d=100, t=0, x=0, y=0)
    return controller
