"""Bezier path tool.

Click to add a straight segment; press and drag to pull the new segment into
a cubic curve (the drag sets the outgoing tangent, the incoming control point
mirrors it). Every anchor and control point stays draggable while editing.

Like the polygon tool, each added point, and each dragged point once it
moves, checkpoints the previous path so undo works point by point.
"""

from models.operations import PathOp
from .base_tool import BaseTool


class PathTool(BaseTool):
    name = 'bezier'

    def __init__(self, controller):
        super().__init__(controller)
        self.pulling = False  # Dragging out a new segment's tangent

    def _point_refs(self):
        """(segment index, coordinate offset) for every editable point."""
        refs = []
        if self.op is None:
            return refs
        for index, seg in enumerate(self.op.segments):
            for offset in range(1, len(seg), 2):
                refs.append((index, offset))
        return refs

    def handle_points(self):
        return [tuple(self.op.segments[i][o:o + 2]) for i, o in self._point_refs()]

    def mouse_down(self, event):
        x, y = float(event.x), float(event.y)
        if self.op is None:
            self.op = PathOp([['M', x, y]], style=self.state.style)
            self.liverender()
            return

        refs = self._point_refs()
        hit = self.hit_test(event.point, self.handle_points())
        if hit is not None:
            self.grab_handle(refs[hit])
            return
        self.controller.checkpoint(self.op)
        self.op.add_segment(['L', x, y])
        self.pulling = True
        self.liverender()

    def mouse_move(self, event):
        x, y = float(event.x), float(event.y)
        if self.drag is not None:
            self.checkpoint_drag()
            index, offset = self.drag
            self.op.segments[index][offset:offset + 2] = [x, y]
            self.liverender()
        elif self.pulling:
            self._pull_last_segment(x, y)
            self.liverender()

    def _pull_last_segment(self, mx, my):
        segments = self.op.segments
        if len(segments) < 2:
            return
        ex, ey = segments[-1][-2:]
        px, py = segments[-2][-2:]
        previous = segments[-2]
        if previous[0] == 'C':
            # Keep the join smooth by mirroring the previous incoming handle
            c1 = (2 * px - previous[3], 2 * py - previous[4])
        else:
            c1 = (px, py)
        c2 = (2 * ex - mx, 2 * ey - my)
        segments[-1] = ['C', c1[0], c1[1], c2[0], c2[1], ex, ey]

    def mouse_up(self, event):
        self.release_handle()
        self.pulling = False

    def key_down(self, event):
        if event.key in ('Enter', 'Escape'):
            self.commit()
            return True
        if event.key == 'Backspace' and self.op is not None:
            self.op.segments.pop()
            if not self.op.segments:
                self.op = None
            self.liverender()
            return True
        return False

    def enter(self, op=None):
        self.pulling = False
        super().enter(op)

    def exit(self):
        self.pulling = False
        super().exit()
