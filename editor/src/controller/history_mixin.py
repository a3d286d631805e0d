"""History management and undo/redo for SketchController

Undo and redo do not simply drop or restore a shape: the shape that becomes
the newest one is taken out of history and handed back to its tool, so it can
be edited again. Multi-click tools checkpoint their shape before each new
point, which makes that resumption work one point at a time.
"""

import logging

from models.app_state import StyleSnapshot
from services import sketch_serializer
from services.sketch_serializer import CorruptSketchError
from utils.logger import loggerRaise

logger = logging.getLogger('History')


class HistoryMixin:
    """Commit, replay, undo/redo, reset and sketch (de)serialization"""

    # ========================================
    # Rendering
    # ========================================

    def _live_shape_id(self):
        tool = getattr(self, 'tool', None)
        if tool is None or tool.op is None:
            return None
        return tool.op.shape_id

    def rerender(self, clear=True, exclude_shape=None):
        """Replay every visible history entry onto the persistent surface

        Args:
            clear: Erase the surface first
            exclude_shape: shape_id to skip; defaults to the shape being edited
        """
        if exclude_shape is None:
            exclude_shape = self._live_shape_id()
        if clear:
            self.surface.clear()
        for op in self.history.visible_ops(exclude_shape):
            op.render(self.surface, self.transforms_for(op.symmetry))

    def render_live(self, op):
        """Draw an uncommitted operation with the current style and symmetry"""
        op.style = self.state.style
        op.render(self.live_surface, self.active_transforms)

    def clear_live(self):
        self.live_surface.clear()

    # ========================================
    # Commit
    # ========================================

    def commit(self, op):
        """Append an operation to history and draw it

        The style and symmetry active now are stamped into a copy of op, so
        later parameter changes never alter it.
        """
        stamped = op.stamped(self.state.style, self.state.symmetry)
        # Earlier checkpoints of this shape are on the surface only if replayed
        replay = self.history.has_shape(stamped.shape_id)
        self.history.push(stamped)
        if replay:
            self.rerender(exclude_shape=None)
        else:
            stamped.render(self.surface, self.transforms_for(stamped.symmetry))
        return stamped

    def checkpoint(self, op):
        """Record the current state of a shape still being edited

        Nothing is drawn; the checkpoint only exists so undo can step back
        to it.
        """
        stamped = op.stamped(self.state.style, self.state.symmetry)
        self.history.push(stamped)
        return stamped

    # ========================================
    # Undo / Redo
    # ========================================

    def undo(self):
        """Undo the newest operation and resume editing the one before it"""
        self.tool.commit()

        if not self.history.above_floor():
            logger.debug("Undo at history floor")
            self.tool.exit()
            self.clear_live()
            return

        self.history.push_redo(self.history.pop())

        # Startup content below the floor is never resumed
        if self.history.above_floor():
            op = self.history.pop()
            self.rerender(exclude_shape=op.shape_id)
            self._switch_tool(op.tool.value, op)
        else:
            self.tool.exit()
            self.rerender()
            self.clear_live()

        logger.debug(f"Undo (history: {len(self.history)}, redo: {len(self.history.redo_entries)})")

    def redo(self):
        """Restore the most recently undone operation for editing"""
        if not self.history.can_redo():
            return

        self.tool.commit()
        op = self.history.pop_redo()
        self.rerender(exclude_shape=op.shape_id)
        self._switch_tool(op.tool.value, op)

        logger.debug(f"Redo (history: {len(self.history)}, redo: {len(self.history.redo_entries)})")

    def _switch_tool(self, name, op=None):
        """Exit the active tool and enter ``name``, resuming ``op`` if given"""
        if name not in self.tools:
            loggerRaise(KeyError(name), f"Unknown tool '{name}'")
        self.tool.exit()
        self.tool = self.tools[name]
        self.state.current_tool = name
        self.tool.enter(op)

    # ========================================
    # Reset / persistence
    # ========================================

    def reset(self):
        """Drop all drawing and history and restore default parameters"""
        self.tool.exit()
        self.history.clear()
        self.state.style = StyleSnapshot()
        self.state.symmetry = self._default_symmetry()
        self.update_symmetry()
        self.surface.clear()
        self.clear_live()
        self.tool.enter()
        logger.debug("Sketch reset")

    def serialize(self):
        """JSON text of the committed history"""
        return sketch_serializer.serialize(self.history.entries)

    def deserialize(self, text):
        """Replace the history with a saved sketch

        The document is fully decoded, and every transform set it needs is
        generated, before anything changes. A corrupt sketch leaves the
        current drawing and history intact.

        Raises:
            CorruptSketchError: text does not decode or cannot be replayed
        """
        try:
            ops = sketch_serializer.deserialize(text)
            for op in ops:
                self.transforms_for(op.symmetry)
        except CorruptSketchError as e:
            self._reject_sketch(e)
        except (KeyError, TypeError, ValueError) as e:
            self._reject_sketch(CorruptSketchError(f"Sketch cannot be replayed: {e}"))

        self.tool.exit()
        self.history.replace(ops)
        self.rerender()
        self.clear_live()
        self.tool.enter()
        logger.debug(f"Loaded sketch with {len(ops)} operations")

    def _reject_sketch(self, error):
        logger.warning(f"Rejected sketch: {error}")
        loggerRaise(error, "Could not load sketch - the file is damaged or not a sketch")
