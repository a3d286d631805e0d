"""Polygon tool: one vertex per click, closed and filled.

Before a vertex is added, and on the first move of a dragged vertex, the
previous state of the polygon is checkpointed into history, so undo
retracts one vertex at a time and resumes editing the remaining ones.

Keys:
    Enter / Escape   finish the polygon
    Backspace        drop the last vertex
"""

from models.operations import PolyOp
from .base_tool import BaseTool


class PolyTool(BaseTool):
    name = 'poly'

    def handle_points(self):
        if self.op is None:
            return []
        return list(self.op.points)

    def mouse_down(self, event):
        if self.op is None:
            self.op = PolyOp([event.point], style=self.state.style)
            self.liverender()
            return

        hit = self.hit_test(event.point, self.handle_points())
        if hit is not None:
            self.grab_handle(hit)
            return
        self.controller.checkpoint(self.op)
        self.op.points.append((float(event.x), float(event.y)))
        self.liverender()

    def mouse_move(self, event):
        if self.drag is None:
            return
        self.checkpoint_drag()
        self.op.points[self.drag] = (float(event.x), float(event.y))
        self.liverender()

    def mouse_up(self, event):
        self.release_handle()

    def key_down(self, event):
        if event.key in ('Enter', 'Escape'):
            self.commit()
            return True
        if event.key == 'Backspace' and self.op is not None:
            self.op.points.pop()
            if not self.op.points:
                self.op = None
            self.liverender()
            return True
        return False
