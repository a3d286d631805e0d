"""Grid tool: place the symmetry lattice or rosette on the canvas.

Handles:
    center      drag to move (x, y)
    spacing     tilings only; its distance from the center sets the spacing
                and its angle sets the tilt
    rotation    rosettes only; its angle sets the rosette offset
"""

import math

from constants import MIN_SPACING, NO_SYMMETRY, ROSETTE_SYMMETRY
from .base_tool import BaseTool

# Distance of the rosette rotation handle from the center
ROSETTE_HANDLE_RADIUS = 50.0


class GridTool(BaseTool):
    name = 'grid'

    def _second_handle(self):
        sym = self.state.symmetry
        if sym.sym == ROSETTE_SYMMETRY:
            angle, length = math.radians(sym.rot), ROSETTE_HANDLE_RADIUS
        else:
            angle, length = math.radians(sym.t), sym.d
        return (sym.x + length * math.cos(angle), sym.y + length * math.sin(angle))

    def handle_points(self):
        sym = self.state.symmetry
        if sym.sym == NO_SYMMETRY:
            return []
        return [(sym.x, sym.y), self._second_handle()]

    def mouse_down(self, event):
        hit = self.hit_test(event.point, self.handle_points())
        self.drag = {0: 'center', 1: 'second'}.get(hit)

    def mouse_move(self, event):
        if self.drag is None:
            return
        sym = self.state.symmetry
        x, y = float(event.x), float(event.y)
        if self.drag == 'center':
            self.controller.update_symmetry(x=x, y=y)
            return

        angle = math.degrees(math.atan2(y - sym.y, x - sym.x))
        if sym.sym == ROSETTE_SYMMETRY:
            self.controller.update_symmetry(rot=angle)
        else:
            d = max(MIN_SPACING, math.hypot(x - sym.x, y - sym.y))
            self.controller.update_symmetry(d=d, t=angle)

    def mouse_up(self, event):
        self.drag = None

    def commit(self):
        # Nothing to commit; placing the grid only changes parameters
        self.drag = None
