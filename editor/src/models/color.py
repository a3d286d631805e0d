"""
Eschersketch - Color Domain Model

Canonical RGBA color representation for stroke and fill styles.
Styles are stored as CSS color strings; all parsing and formatting flows
through this class.
"""

import re
from typing import List, Optional, Tuple


_RGBA_PATTERN = re.compile(
    r'^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$')


class Color:
    """Immutable color with uint8 RGB storage and a float alpha channel.

    Internal storage: _r, _g, _b (uint8 0-255), _a (float 0-1)
    """

    def __init__(self, r: int, g: int, b: int, a: float = 1.0):
        """Direct construction from RGB uint8 values (0-255) and alpha (0-1).

        Args:
            r: Red component (0-255)
            g: Green component (0-255)
            b: Blue component (0-255)
            a: Alpha (0-1)
        """
        # Clamp to valid ranges
        self._r = max(0, min(255, int(r)))
        self._g = max(0, min(255, int(g)))
        self._b = max(0, min(255, int(b)))
        self._a = max(0.0, min(1.0, float(a)))

    @property
    def r(self) -> int:
        """Red component (0-255) - READ ONLY"""
        return self._r

    @property
    def g(self) -> int:
        """Green component (0-255) - READ ONLY"""
        return self._g

    @property
    def b(self) -> int:
        """Blue component (0-255) - READ ONLY"""
        return self._b

    @property
    def a(self) -> float:
        """Alpha (0-1) - READ ONLY"""
        return self._a

    # ========================================
    # Output Methods
    # ========================================

    def to_css(self) -> str:
        """Convert to the CSS rgba() string stored in style snapshots.

        Returns:
            String like 'rgba(200, 100, 100, 0.5)'
        """
        return f"rgba({self._r}, {self._g}, {self._b}, {self._a:g})"

    def to_hex(self) -> str:
        """Convert to hex color string: #RRGGBB (alpha dropped)."""
        return f"#{self._r:02X}{self._g:02X}{self._b:02X}"

    def to_rgba255(self) -> List[int]:
        """Convert to RGBA uint8 list [0-255]."""
        return [self._r, self._g, self._b, int(round(self._a * 255))]

    def to_tuple_float4(self) -> Tuple[float, float, float, float]:
        """Convert to normalized float RGBA tuple (0-1)."""
        return (self._r / 255.0, self._g / 255.0, self._b / 255.0, self._a)

    def to_qcolor(self):
        """Convert to PyQt5 QColor object.

        Returns:
            QColor: Qt color object for painting
        """
        from PyQt5.QtGui import QColor
        return QColor(self._r, self._g, self._b, int(round(self._a * 255)))

    # ========================================
    # Static Factory Methods
    # ========================================

    @staticmethod
    def from_css(css: str) -> Optional['Color']:
        """Create Color from '#RGB', '#RRGGBB', 'rgb(r,g,b)' or 'rgba(r,g,b,a)'.

        Returns:
            Color object if parse succeeds, None otherwise
        """
        if not isinstance(css, str):
            return None
        css = css.strip()
        if css.startswith('#'):
            return Color.from_hex(css)

        match = _RGBA_PATTERN.match(css)
        if not match:
            return None
        alpha = match.group(4)
        return Color(int(match.group(1)), int(match.group(2)), int(match.group(3)),
                     float(alpha) if alpha is not None else 1.0)

    @staticmethod
    def from_hex(hex_string: str) -> Optional['Color']:
        """Create Color from hex string: #RRGGBB, RRGGBB or the #RGB shorthand.

        Args:
            hex_string: Hex color string with or without leading #

        Returns:
            Color object if parse succeeds, None otherwise
        """
        if not isinstance(hex_string, str):
            return None

        # Strip leading # if present
        hex_string = hex_string.lstrip('#')

        # Expand shorthand: abc -> aabbcc
        if len(hex_string) == 3:
            hex_string = ''.join(ch * 2 for ch in hex_string)

        if len(hex_string) != 6:
            return None

        try:
            r = int(hex_string[0:2], 16)
            g = int(hex_string[2:4], 16)
            b = int(hex_string[4:6], 16)
            return Color(r, g, b)
        except ValueError:
            return None

    @staticmethod
    def from_rgba(r: int, g: int, b: int, a: float = 1.0) -> 'Color':
        """Create Color from color-picker components (alias for the constructor)."""
        return Color(r, g, b, a)

    # ========================================
    # Equality and Hashing
    # ========================================

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return False
        return (self._r, self._g, self._b, self._a) == (other._r, other._g, other._b, other._a)

    def __hash__(self) -> int:
        return hash((self._r, self._g, self._b, self._a))

    def __repr__(self) -> str:
        return f"Color({self._r}, {self._g}, {self._b}, {self._a:g})"

    def __str__(self) -> str:
        """String representation - uses CSS format."""
        return self.to_css()
