"""Toolkit-neutral input events delivered to drawing tools."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in canvas coordinates."""
    x: float
    y: float
    button: int = 1
    shift: bool = False
    ctrl: bool = False
    touch: bool = False

    @property
    def point(self):
        return (self.x, self.y)


@dataclass(frozen=True)
class KeyEvent:
    # Key names: 'Enter', 'Escape', 'Backspace', 'Delete' or a single character
    key: str
    ctrl: bool = False
    shift: bool = False
