"""
Eschersketch - Constants and Configuration

This module contains all constant values used throughout the application:
- Canvas defaults
- Symmetry group names and grid limits
- Default symmetry and drawing style settings
- Min/max values and constraints
- Editor interaction constants
"""

# ======================================================================
# CANVAS
# ======================================================================

# Default canvas size in pixels (the window replaces these at startup)
CANVAS_WIDTH = 1600
CANVAS_HEIGHT = 1200

# ======================================================================
# SYMMETRIES
# ======================================================================

INIT_SYMMETRY = 'p6m'

# Special symmetry names handled outside the wallpaper catalog
NO_SYMMETRY = 'none'
ROSETTE_SYMMETRY = 'rosette'

# All tiling symmetries, in UI order
TILING_SYMMETRIES = [
    'p1', 'diagonalgrid', 'pm', 'cm', 'pg',     # rotation free
    'pmg', 'pgg', 'pmm', 'p2', 'cmm',           # 180 degree containing
    'p4', 'p4g', 'p4m',                         # square
    'hexgrid', 'p3', 'p6', 'p31m', 'p3m1', 'p6m',  # hexagonal
]

# Everything selectable in the symmetry picker
ALL_SYMMETRIES = [NO_SYMMETRY] + TILING_SYMMETRIES + [ROSETTE_SYMMETRY]

# ======================================================================
# GRID LIMITS
# ======================================================================

# Lattice generation cost is O(Nx * Ny * |point group|), keep it interactive
MAX_GRID_N = 50
MIN_GRID_N = 1

# Smallest lattice spacing in canvas units
MIN_SPACING = 1.0

# Rosette rotation count limits
MIN_ROSETTE_ROTATIONS = 1
MAX_ROSETTE_ROTATIONS = 36

# ======================================================================
# DEFAULT SYMMETRY STATE
# ======================================================================

DEFAULT_CENTER_X = 800
DEFAULT_CENTER_Y = 400
DEFAULT_SPACING = 100
DEFAULT_TILT = 0           # degrees
DEFAULT_GRID_NX = 18
DEFAULT_GRID_NY = 14
DEFAULT_ROSETTE_NROT = 3
DEFAULT_ROSETTE_NREF = 2
DEFAULT_ROSETTE_ROT = 0    # degrees

# Recalculate grid Nx, Ny whenever the spacing changes
DEFAULT_DYNAMIC_GRID_SIZE = True

# ======================================================================
# DRAWING STYLE
# ======================================================================

MIN_LINEWIDTH = 0.1
MAX_LINEWIDTH = 10.0
DELTA_LINEWIDTH = 0.1

LINE_CAPS = ('butt', 'round', 'square')
LINE_JOINS = ('round', 'bevel', 'miter')

DEFAULT_LINE_CAP = 'butt'
DEFAULT_LINE_JOIN = 'round'
DEFAULT_MITER_LIMIT = 10.0
DEFAULT_LINE_WIDTH = 1.0
DEFAULT_FILL_STYLE = 'rgba(200, 100, 100, 0.5)'
DEFAULT_STROKE_STYLE = 'rgba(100, 100, 100, 1.0)'

# Canvas-rendered editing handles
HANDLE_STROKE_STYLE = 'rgba(0, 0, 0, 0.4)'
HANDLE_FILL_STYLE = 'rgba(255, 255, 150, 0.4)'

# ======================================================================
# TOOLS
# ======================================================================

DEFAULT_TOOL = 'pencil'

# Pick radius (pixels) for dragging handles; raised for touch screens
HIT_RADIUS = 4
TOUCH_HIT_RADIUS = 15

# ======================================================================
# CACHING / HISTORY
# ======================================================================

# Distinct tilings kept in the transform cache
TRANSFORM_CACHE_SIZE = 64

MAX_RECENT_FILES = 10

# ======================================================================
# EXPORT
# ======================================================================

# Pixel density multiplier for tile exports
TILE_PIXEL_SCALE = 4

SKETCH_FILE_FILTER = "Eschersketch Files (*.json);;All Files (*)"
PNG_FILE_FILTER = "PNG Images (*.png);;All Files (*)"
SVG_FILE_FILTER = "SVG Images (*.svg);;All Files (*)"
