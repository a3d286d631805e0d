"""
Eschersketch - Drawing Operations

A DrawOperation is one committed (or in-progress) shape: its geometry, the
style it was drawn with and the symmetry it was replicated under. The set of
kinds is closed; ``ToolKind`` names them and ``DrawOperation.from_record``
decodes persisted records by dispatching over it.

Records are plain dicts suitable for JSON:
    {"tool": "line", "start": [x, y], "end": [x, y],
     "style": {...}, "symmetry": {...} | null, "shape_id": "..."}
"""

import copy
import math
import uuid
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence

from models.app_state import StyleSnapshot, SymmetryParams


class ToolKind(Enum):
    """Operation tags as stored in sketch files."""
    LINE = 'line'
    PENCIL = 'pencil'
    CIRCLE = 'circle'
    POLY = 'poly'
    BEZIER = 'bezier'


_COMMON_KEYS = frozenset(('tool', 'style', 'symmetry', 'shape_id'))

OPERATION_FIELDS = {
    ToolKind.LINE: ('start', 'end'),
    ToolKind.PENCIL: ('points',),
    ToolKind.CIRCLE: ('center', 'radius'),
    ToolKind.POLY: ('points',),
    ToolKind.BEZIER: ('segments',),
}


def _point(value) -> tuple:
    x, y = value
    return (float(x), float(y))


class DrawOperation(ABC):
    """Base for every shape kind.

    ``shape_id`` is shared by the successive checkpoints of one multi-click
    shape, so history replay can draw only the newest of them.
    """

    tool: ToolKind = None

    def __init__(self, style: Optional[StyleSnapshot] = None,
                 symmetry: Optional[SymmetryParams] = None,
                 shape_id: Optional[str] = None,
                 extra: Optional[dict] = None):
        self.style = style or StyleSnapshot()
        self.symmetry = symmetry
        self.shape_id = shape_id or uuid.uuid4().hex
        # unrecognised record keys, written back unchanged
        self.extra = dict(extra or {})

    @abstractmethod
    def render(self, surface, transforms):
        """Draw this operation onto ``surface`` once per transform."""
        pass

    @abstractmethod
    def geometry(self) -> dict:
        """Geometry fields as JSON-ready values."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """True when there is nothing worth committing."""
        pass

    def stamped(self, style: StyleSnapshot, symmetry: SymmetryParams) -> 'DrawOperation':
        """Copy carrying the style and symmetry active at commit time."""
        op = self.snapshot()
        op.style = style
        op.symmetry = symmetry
        return op

    def snapshot(self) -> 'DrawOperation':
        """Independent copy with the same shape_id."""
        return copy.deepcopy(self)

    # ========================================
    # Records
    # ========================================

    def to_record(self) -> dict:
        record = dict(self.extra)
        record['tool'] = self.tool.value
        record.update(self.geometry())
        record['style'] = self.style.to_dict()
        record['symmetry'] = self.symmetry.to_dict() if self.symmetry else None
        record['shape_id'] = self.shape_id
        return record

    @staticmethod
    def from_record(record: dict) -> 'DrawOperation':
        """Rebuild an operation from a persisted record.

        Raises:
            ValueError: unknown tool tag
            KeyError, TypeError: missing or malformed fields
        """
        kind = ToolKind(record['tool'])
        known = _COMMON_KEYS.union(OPERATION_FIELDS[kind])
        common = {
            'style': StyleSnapshot.from_dict(record.get('style') or {}),
            'symmetry': (SymmetryParams.from_dict(record['symmetry'])
                         if record.get('symmetry') else None),
            'shape_id': record.get('shape_id'),
            'extra': {k: v for k, v in record.items() if k not in known},
        }

        if kind is ToolKind.LINE:
            return LineOp(record['start'], record['end'], **common)
        elif kind is ToolKind.PENCIL:
            return PencilOp(record['points'], **common)
        elif kind is ToolKind.CIRCLE:
            return CircleOp(record['center'], record['radius'], **common)
        elif kind is ToolKind.POLY:
            return PolyOp(record['points'], **common)
        elif kind is ToolKind.BEZIER:
            return PathOp(record['segments'], **common)
        raise ValueError(f"Unhandled tool kind {kind}")

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (self.geometry() == other.geometry() and self.style == other.style
                and self.symmetry == other.symmetry and self.shape_id == other.shape_id)

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.geometry()}, shape_id={self.shape_id[:8]})"


# ======================================================================
# Stroke-only shapes
# ======================================================================

class LineOp(DrawOperation):
    tool = ToolKind.LINE

    def __init__(self, start, end, **kwargs):
        super().__init__(**kwargs)
        self.start = _point(start)
        self.end = _point(end)

    def render(self, surface, transforms):
        segments = [['M', *self.start], ['L', *self.end]]
        surface.draw_path(segments, self.style, transforms, fill=False, stroke=True)

    def geometry(self):
        return {'start': list(self.start), 'end': list(self.end)}

    def is_empty(self):
        return self.start == self.end


class PencilOp(DrawOperation):
    """Freehand polyline."""
    tool = ToolKind.PENCIL

    def __init__(self, points: Sequence = (), **kwargs):
        super().__init__(**kwargs)
        self.points: List[tuple] = [_point(p) for p in points]

    def add_point(self, point):
        self.points.append(_point(point))

    def render(self, surface, transforms):
        if not self.points:
            return
        first, rest = self.points[0], self.points[1:] or [self.points[0]]
        segments = [['M', *first]] + [['L', *p] for p in rest]
        surface.draw_path(segments, self.style, transforms, fill=False, stroke=True)

    def geometry(self):
        return {'points': [list(p) for p in self.points]}

    def is_empty(self):
        return len(self.points) < 2


# ======================================================================
# Filled shapes
# ======================================================================

class CircleOp(DrawOperation):
    tool = ToolKind.CIRCLE

    def __init__(self, center, radius, **kwargs):
        super().__init__(**kwargs)
        self.center = _point(center)
        self.radius = abs(float(radius))

    def set_edge(self, point):
        """Set the radius so the circle passes through ``point``."""
        x, y = _point(point)
        self.radius = math.hypot(x - self.center[0], y - self.center[1])

    def render(self, surface, transforms):
        surface.draw_circle(self.center, self.radius, self.style, transforms,
                            fill=True, stroke=True)

    def geometry(self):
        return {'center': list(self.center), 'radius': self.radius}

    def is_empty(self):
        return self.radius <= 0


class PolyOp(DrawOperation):
    """Closed polygon built one vertex per click."""
    tool = ToolKind.POLY

    def __init__(self, points: Sequence = (), **kwargs):
        super().__init__(**kwargs)
        self.points: List[tuple] = [_point(p) for p in points]

    def render(self, surface, transforms):
        if not self.points:
            return
        segments = [['M', *self.points[0]]] + [['L', *p] for p in self.points[1:]]
        surface.draw_path(segments, self.style, transforms,
                          closed=True, fill=True, stroke=True)

    def geometry(self):
        return {'points': [list(p) for p in self.points]}

    def is_empty(self):
        return len(self.points) < 2


class PathOp(DrawOperation):
    """Bezier path of M/L/C segments."""
    tool = ToolKind.BEZIER

    _ARITY = {'M': 2, 'L': 2, 'C': 6}

    def __init__(self, segments: Sequence = (), **kwargs):
        super().__init__(**kwargs)
        self.segments: List[list] = [self._segment(s) for s in segments]

    @classmethod
    def _segment(cls, seg) -> list:
        cmd = seg[0]
        if cmd not in cls._ARITY or len(seg) != cls._ARITY[cmd] + 1:
            raise ValueError(f"Bad path segment {seg!r}")
        return [cmd] + [float(v) for v in seg[1:]]

    def add_segment(self, seg):
        self.segments.append(self._segment(seg))

    def render(self, surface, transforms):
        if not self.segments:
            return
        surface.draw_path(self.segments, self.style, transforms, fill=True, stroke=True)

    def geometry(self):
        return {'segments': [list(s) for s in self.segments]}

    def is_empty(self):
        return len(self.segments) < 2

