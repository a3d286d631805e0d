"""Base class for drawing tools.

A tool owns at most one live (uncommitted) operation. The controller routes
pointer and key events to the active tool, and asks it to ``commit`` before
undo, redo and tool switches.

Subclasses must implement:
- mouse_down(), mouse_move(), mouse_up(): pointer handling

Optional hooks default to no-ops: mouse_leave(), key_down(), draw_handles().
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from constants import HANDLE_FILL_STYLE, HANDLE_STROKE_STYLE
from models.app_state import StyleSnapshot
from models.transform import AffineTransformSet, AffineTransform

HANDLE_STYLE = StyleSnapshot(stroke_style=HANDLE_STROKE_STYLE,
                             fill_style=HANDLE_FILL_STYLE, line_width=1.0)

_IDENTITY = AffineTransformSet([AffineTransform.identity()])


class BaseTool(ABC):
    """Abstract base class for all tools."""

    name: str = None

    def __init__(self, controller):
        self.controller = controller
        self.op = None       # Live operation being edited
        self.drag = None     # Handle currently being dragged
        self._drag_pending = False  # grabbed handle not yet checkpointed

    # ========================================
    # Pointer / key events
    # ========================================

    @abstractmethod
    def mouse_down(self, event):
        pass

    @abstractmethod
    def mouse_move(self, event):
        pass

    @abstractmethod
    def mouse_up(self, event):
        pass

    def mouse_leave(self, event):
        pass

    def key_down(self, event):
        """Handle a key press.

        Returns:
            True if the tool consumed the key
        """
        return False

    # ========================================
    # Lifecycle
    # ========================================

    def enter(self, op=None):
        """Activate the tool, optionally resuming ``op``.

        Resuming restores the operation's style and symmetry as the active
        parameters so further edits look the way the shape was drawn.
        """
        self.drag = None
        self._drag_pending = False
        if op is not None:
            self.controller.restore_params(op.style, op.symmetry)
            self.op = op
        else:
            self.op = None
        self.liverender()

    def exit(self):
        """Drop any live state without committing."""
        self.op = None
        self.drag = None
        self._drag_pending = False
        self.controller.clear_live()

    def commit(self):
        """Commit the live operation, if there is one worth keeping."""
        op, self.op = self.op, None
        self.drag = None
        self._drag_pending = False
        if op is not None and not op.is_empty():
            self.controller.commit(op)
        self.controller.clear_live()

    def liverender(self):
        """Redraw the live operation and its handles on the live surface."""
        self.controller.clear_live()
        if self.op is not None:
            self.controller.render_live(self.op)
        self.draw_handles()

    def draw_handles(self):
        points = self.handle_points()
        if points:
            self._draw_handle_points(points)

    # ========================================
    # Helpers
    # ========================================

    @property
    def state(self):
        return self.controller.state

    def _draw_handle_points(self, points: Sequence):
        surface = self.controller.live_surface
        radius = self.state.options.hit_radius
        for point in points:
            surface.draw_circle(point, radius, HANDLE_STYLE, _IDENTITY, fill=True, stroke=True)

    def hit_test(self, point, candidates: Sequence) -> Optional[int]:
        """Index of the first candidate within the hit radius of ``point``."""
        radius = self.state.options.hit_radius
        x, y = point
        for index, (cx, cy) in enumerate(candidates):
            if (cx - x) ** 2 + (cy - y) ** 2 <= radius * radius:
                return index
        return None

    def grab_handle(self, handle):
        """Start dragging ``handle``; history is checkpointed on the first move."""
        self.drag = handle
        self._drag_pending = True

    def checkpoint_drag(self):
        if self._drag_pending:
            self._drag_pending = False
            self.controller.checkpoint(self.op)

    def release_handle(self):
        self.drag = None
        self._drag_pending = False

    def handle_points(self) -> List[tuple]:
        return []

    def __repr__(self):
        return f"<{type(self).__name__} op={self.op!r}>"
