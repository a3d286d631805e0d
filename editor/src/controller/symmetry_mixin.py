"""Symmetry and style parameters for SketchController"""

import logging
import math

from constants import (
    ALL_SYMMETRIES, LINE_CAPS, LINE_JOINS, MAX_GRID_N, MAX_LINEWIDTH, MIN_GRID_N,
    MIN_LINEWIDTH, NO_SYMMETRY, ROSETTE_SYMMETRY,
)
from models.color import Color
from services.symmetry_transforms import (
    TransformCache, UnknownSymmetryError, generate_rosette, identity_set,
)

logger = logging.getLogger(__name__)


def _clamp(value, low, high):
    return max(low, min(high, value))


class SymmetryMixin:
    """Active symmetry, transform set and drawing style"""

    def _init_symmetry(self):
        self.transform_cache = TransformCache()
        self.active_transforms = identity_set()
        self.update_symmetry()

    def transforms_for(self, symmetry):
        """Transform set for a symmetry snapshot

        Args:
            symmetry: SymmetryParams, or None for no symmetry

        Returns:
            AffineTransformSet

        Raises:
            UnknownSymmetryError: symmetry names no known group
        """
        if symmetry is None or symmetry.sym == NO_SYMMETRY:
            return identity_set()
        symmetry = symmetry.clamped()
        if symmetry.sym == ROSETTE_SYMMETRY:
            return generate_rosette(symmetry.n_rot, symmetry.n_ref,
                                    symmetry.x, symmetry.y, math.radians(symmetry.rot))
        return self.transform_cache.get(symmetry.sym, symmetry.nx, symmetry.ny,
                                        symmetry.d, symmetry.t, symmetry.x, symmetry.y)

    def update_symmetry(self, **changes):
        """Change symmetry parameters and regenerate the active transform set

        With dynamic grid sizing the lattice extent follows the canvas size
        and spacing unless nx/ny are given explicitly.

        Raises:
            UnknownSymmetryError: unknown symmetry name
            TypeError: unknown parameter name
        """
        name = changes.get('sym', self.state.symmetry.sym)
        if name not in ALL_SYMMETRIES:
            raise UnknownSymmetryError(name)

        symmetry = self.state.symmetry.updated(**changes).clamped()
        d = symmetry.d
        updates = {}
        if self.state.options.dynamic_grid_size:
            if 'nx' not in changes:
                updates['nx'] = _clamp(round(self.surface.width / d * 2), MIN_GRID_N, MAX_GRID_N)
            if 'ny' not in changes:
                updates['ny'] = _clamp(round(self.surface.height / d * 2), MIN_GRID_N, MAX_GRID_N)
        symmetry = symmetry.updated(**updates)

        self.state.symmetry = symmetry
        self.active_transforms = self.transforms_for(symmetry)
        logger.debug(f"Symmetry {symmetry.sym}: {len(self.active_transforms)} transforms")
        self._params_changed()

    def update_style(self, **changes):
        """Change the drawing style used for new and resumed operations

        Raises:
            ValueError: unknown line cap or join
            TypeError: unknown style field
        """
        if 'line_width' in changes:
            changes['line_width'] = _clamp(float(changes['line_width']), MIN_LINEWIDTH, MAX_LINEWIDTH)
        if changes.get('line_cap', LINE_CAPS[0]) not in LINE_CAPS:
            raise ValueError(f"Unknown line cap '{changes['line_cap']}'")
        if changes.get('line_join', LINE_JOINS[0]) not in LINE_JOINS:
            raise ValueError(f"Unknown line join '{changes['line_join']}'")

        self.state.style = self.state.style.updated(**changes)
        self._params_changed()

    def set_color(self, target, r, g, b, a=1.0):
        """Set stroke or fill color from color picker components

        Args:
            target: 'stroke' or 'fill'
        """
        if target not in ('stroke', 'fill'):
            raise ValueError(f"Unknown color target '{target}'")
        self.update_style(**{f'{target}_style': Color(r, g, b, a).to_css()})

    def restore_params(self, style, symmetry):
        """Make a resumed operation's style and symmetry the active ones"""
        self.state.style = style
        if symmetry is not None:
            self.state.symmetry = symmetry
            self.active_transforms = self.transforms_for(symmetry)
        self._notify_param_listeners()

    def add_param_listener(self, callback):
        """Callback receives the AppState whenever style or symmetry changes"""
        self._param_listeners.append(callback)

    def _notify_param_listeners(self):
        for callback in self._param_listeners:
            callback(self.state)

    def _params_changed(self):
        self._notify_param_listeners()
        tool = getattr(self, 'tool', None)
        if tool is not None:
            tool.liverender()
