"""
Eschersketch - Sketch Controller

Owns the application state, the operation history, the drawing tools and the
two render targets:
    surface        committed operations (persistent layer)
    live_surface   the active tool's uncommitted shape and its handles

The controller is toolkit-neutral; the Qt canvas widget and the headless CLI
both drive it through plain method calls.
"""

import logging

from drawing_tools import AVAILABLE_TOOLS
from models.app_state import AppState
from services.surfaces import RecordingSurface
from utils.history_manager import HistoryStack

from .config_mixin import ConfigMixin
from .event_mixin import EventMixin
from .history_mixin import HistoryMixin
from .symmetry_mixin import SymmetryMixin

logger = logging.getLogger(__name__)


class SketchController(SymmetryMixin, HistoryMixin, EventMixin, ConfigMixin):
    """Drawing state machine: tools, history and symmetry

    Args:
        surface: Surface for committed operations
        live_surface: Surface for the live preview (recording surface if omitted)
        config_dir: Directory holding config.json; None keeps config in memory
        startup_ops: Operations loaded before the user starts; they sit below
            the undo floor and can never be undone
    """

    def __init__(self, surface, live_surface=None, config_dir=None, startup_ops=()):
        self.surface = surface
        self.live_surface = live_surface or RecordingSurface(surface.width, surface.height)
        self.state = AppState()
        self.history = HistoryStack()
        self._param_listeners = []
        self.tool = None

        self._init_config(config_dir)
        self._load_config()
        self._init_symmetry()

        self.tools = {name: tool_class(self) for name, tool_class in AVAILABLE_TOOLS.items()}
        self.tool = self.tools[self.state.current_tool]

        self._init_state(startup_ops)

    def _init_state(self, startup_ops):
        """Load startup content and freeze it below the undo floor"""
        for op in startup_ops:
            self.history.push(op)
        self.history.mark_floor()
        self.rerender()
        self.tool.enter()

    def resize(self, width, height):
        """Resize both surfaces and redraw"""
        self.surface.resize(width, height)
        self.live_surface.resize(width, height)
        self.update_symmetry()
        self.rerender()
        self.tool.liverender()

    def add_history_listener(self, callback):
        self.history.add_listener(callback)
