"""Input routing and tool selection for SketchController"""

import logging

from constants import HIT_RADIUS, TOUCH_HIT_RADIUS
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)


class EventMixin:
    """Pointer/key dispatch to the active tool plus global shortcuts"""

    def mouse_down(self, event):
        self.tool.mouse_down(event)

    def mouse_move(self, event):
        self.tool.mouse_move(event)

    def mouse_up(self, event):
        self.tool.mouse_up(event)

    def mouse_leave(self, event):
        self.tool.mouse_leave(event)

    def key_down(self, event):
        """Handle global shortcuts, then let the active tool see the key

        Returns:
            True if the key was consumed
        """
        key = event.key.lower() if len(event.key) == 1 else event.key
        if event.ctrl and key == 'z':
            if event.shift:
                self.redo()
            else:
                self.undo()
            return True
        if event.ctrl and key == 'y':
            self.redo()
            return True
        return self.tool.key_down(event)

    def change_tool(self, name):
        """Commit and leave the active tool, then enter ``name``"""
        if name not in self.tools:
            loggerRaise(KeyError(name), f"Unknown tool '{name}'")

        self.tool.commit()
        self.tool.exit()
        self.tool = self.tools[name]
        self.state.current_tool = name
        self.tool.enter()
        logger.debug(f"Tool: {name}")

    def set_hit_radius(self, radius):
        """Pick radius for canvas handles"""
        self.state.options.hit_radius = max(1.0, float(radius))
        self.tool.liverender()

    def set_touch_mode(self, enabled):
        """Use the larger touch hit radius for canvas handles"""
        self.set_hit_radius(TOUCH_HIT_RADIUS if enabled else HIT_RADIUS)
