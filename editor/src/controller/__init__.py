"""
Eschersketch - Controller

SketchController is assembled from mixins, one per concern:
    SymmetryMixin   symmetry/style parameters and transform sets
    HistoryMixin    commit, replay, undo/redo, reset, (de)serialization
    EventMixin      pointer/key routing and tool selection
    ConfigMixin     JSON config and recent files
"""

from .config_mixin import DEFAULT_CONFIG_DIR
from .sketch_controller import SketchController

__all__ = ['SketchController', 'DEFAULT_CONFIG_DIR']
