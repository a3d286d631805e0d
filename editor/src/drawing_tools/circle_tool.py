"""Circle tool: press at the center, drag out the radius.

The center and edge handles stay draggable until the next press away from
them.
"""

from models.operations import CircleOp
from .base_tool import BaseTool


class CircleTool(BaseTool):
    name = 'circle'

    def handle_points(self):
        if self.op is None:
            return []
        cx, cy = self.op.center
        return [self.op.center, (cx + self.op.radius, cy)]

    def mouse_down(self, event):
        hit = self.hit_test(event.point, self.handle_points())
        if hit is not None:
            self.drag = 'center' if hit == 0 else 'edge'
            return

        if self.op is not None:
            self.commit()
        self.op = CircleOp(event.point, 0.0, style=self.state.style)
        self.drag = 'edge'
        self.liverender()

    def mouse_move(self, event):
        if self.drag is None:
            return
        if self.drag == 'center':
            self.op.center = (float(event.x), float(event.y))
        else:
            self.op.set_edge(event.point)
        self.liverender()

    def mouse_up(self, event):
        self.drag = None
        if self.op is not None and self.op.is_empty():
            self.op = None
        self.liverender()

    def key_down(self, event):
        if event.key in ('Enter', 'Escape'):
            self.commit()
            return True
        return False
