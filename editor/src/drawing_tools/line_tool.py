"""Straight line tool.

Press-drag-release draws a line. Its two endpoints stay draggable until the
next press away from them, which commits the line and starts a new one.
"""

from models.operations import LineOp
from .base_tool import BaseTool


class LineTool(BaseTool):
    name = 'line'

    def handle_points(self):
        if self.op is None:
            return []
        return [self.op.start, self.op.end]

    def mouse_down(self, event):
        hit = self.hit_test(event.point, self.handle_points())
        if hit is not None:
            self.drag = 'start' if hit == 0 else 'end'
            return

        if self.op is not None:
            self.commit()
        self.op = LineOp(event.point, event.point, style=self.state.style)
        self.drag = 'end'
        self.liverender()

    def mouse_move(self, event):
        if self.drag is None:
            return
        setattr(self.op, self.drag, (float(event.x), float(event.y)))
        self.liverender()

    def mouse_up(self, event):
        self.drag = None
        # A click without a drag leaves nothing to edit
        if self.op is not None and self.op.is_empty():
            self.op = None
        self.liverender()

    def key_down(self, event):
        if event.key in ('Enter', 'Escape'):
            self.commit()
            return True
        return False
