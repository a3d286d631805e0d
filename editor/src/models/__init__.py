"""
Eschersketch - Data Models

Value types shared across the editor: affine transforms, colors, style and
symmetry snapshots, drawing operations and input events.
"""

from .transform import AffineTransform, AffineTransformSet, Vec2, compose
from .color import Color
from .app_state import AppState, EditorOptions, StyleSnapshot, SymmetryParams
from .operations import (
    CircleOp, DrawOperation, LineOp, PathOp, PencilOp, PolyOp, ToolKind,
)
from .input_events import KeyEvent, PointerEvent

__all__ = [
    'AffineTransform', 'AffineTransformSet', 'Vec2', 'compose', 'Color',
    'AppState', 'EditorOptions', 'StyleSnapshot', 'SymmetryParams',
    'DrawOperation', 'LineOp', 'PencilOp', 'CircleOp', 'PolyOp', 'PathOp',
    'ToolKind', 'KeyEvent', 'PointerEvent',
]
