"""Application state values shared by the controller, tools and history.

Style and symmetry parameters are immutable values. A change replaces the
whole value, so anything that captured the previous one (a committed
operation, a render pass) keeps seeing a consistent snapshot.
"""

import math
from dataclasses import asdict, dataclass, field, fields, replace

import constants


def _clamp(value, low, high):
    return max(low, min(high, value))


def _record_fields(cls, data) -> dict:
    """Known fields of a saved record, converted to the dataclass field types.

    Raises:
        TypeError: data is not an object, or a field has the wrong JSON type
        ValueError: a number is not finite
    """
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} must be an object, not {type(data).__name__}")

    values = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if f.type is str:
            if not isinstance(value, str):
                raise TypeError(f"{f.name} must be a string")
        else:
            # bool is an int subclass but never a valid number here
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{f.name} must be a number")
            if not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite")
            value = f.type(value)
        values[f.name] = value
    return values


@dataclass(frozen=True)
class StyleSnapshot:
    """Stroke/fill style captured into every committed operation."""
    stroke_style: str = constants.DEFAULT_STROKE_STYLE
    fill_style: str = constants.DEFAULT_FILL_STYLE
    line_width: float = constants.DEFAULT_LINE_WIDTH
    line_cap: str = constants.DEFAULT_LINE_CAP
    line_join: str = constants.DEFAULT_LINE_JOIN
    miter_limit: float = constants.DEFAULT_MITER_LIMIT

    def updated(self, **changes) -> 'StyleSnapshot':
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'StyleSnapshot':
        """Build from a saved record, ignoring unknown keys."""
        return cls(**_record_fields(cls, data))


@dataclass(frozen=True)
class SymmetryParams:
    """Symmetry selection plus lattice/rosette placement.

    Angles ``t`` (lattice tilt) and ``rot`` (rosette offset) are in degrees.
    """
    sym: str = constants.INIT_SYMMETRY
    x: float = constants.DEFAULT_CENTER_X
    y: float = constants.DEFAULT_CENTER_Y
    d: float = constants.DEFAULT_SPACING
    t: float = constants.DEFAULT_TILT
    nx: int = constants.DEFAULT_GRID_NX
    ny: int = constants.DEFAULT_GRID_NY
    n_rot: int = constants.DEFAULT_ROSETTE_NROT
    n_ref: int = constants.DEFAULT_ROSETTE_NREF
    rot: float = constants.DEFAULT_ROSETTE_ROT

    def updated(self, **changes) -> 'SymmetryParams':
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    def clamped(self) -> 'SymmetryParams':
        """Copy with spacing, grid extent and rotation count kept in range.

        Lattice generation is O(nx * ny * |point group|) and runs to
        completion, so every snapshot used for rendering goes through here.
        """
        return replace(
            self,
            d=max(constants.MIN_SPACING, float(self.d)),
            nx=_clamp(int(self.nx), constants.MIN_GRID_N, constants.MAX_GRID_N),
            ny=_clamp(int(self.ny), constants.MIN_GRID_N, constants.MAX_GRID_N),
            n_rot=_clamp(int(self.n_rot), constants.MIN_ROSETTE_ROTATIONS,
                         constants.MAX_ROSETTE_ROTATIONS),
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'SymmetryParams':
        """Build from a saved record; out-of-range extents are clamped."""
        return cls(**_record_fields(cls, data)).clamped()


@dataclass
class EditorOptions:
    dynamic_grid_size: bool = constants.DEFAULT_DYNAMIC_GRID_SIZE
    hit_radius: float = constants.HIT_RADIUS


@dataclass
class AppState:
    """Mutable holder for the current parameters, owned by the controller."""
    symmetry: SymmetryParams = field(default_factory=SymmetryParams)
    style: StyleSnapshot = field(default_factory=StyleSnapshot)
    current_tool: str = constants.DEFAULT_TOOL
    options: EditorOptions = field(default_factory=EditorOptions)
