"""Freehand pencil tool - one stroke per press/release."""

from models.operations import PencilOp
from .base_tool import BaseTool


class PencilTool(BaseTool):
    name = 'pencil'

    def __init__(self, controller):
        super().__init__(controller)
        self.drawing = False

    def mouse_down(self, event):
        # A resumed stroke is finished as soon as a new one starts
        if self.op is not None:
            self.commit()
        self.op = PencilOp([event.point], style=self.state.style)
        self.drawing = True
        self.liverender()

    def mouse_move(self, event):
        if not self.drawing:
            return
        self.op.add_point(event.point)
        self.liverender()

    def mouse_up(self, event):
        if not self.drawing:
            return
        self.drawing = False
        self.commit()

    def mouse_leave(self, event):
        if self.drawing:
            self.drawing = False
            self.commit()

    def enter(self, op=None):
        self.drawing = False
        super().enter(op)

    def exit(self):
        self.drawing = False
        super().exit()
