"""UI components for Eschersketch

Direct imports:
"""

from .sketch_canvas import SketchCanvas

__all__ = ['SketchCanvas']
