"""Drawing surfaces that committed and live operations render onto.

A surface receives one call per operation together with the transform set
snapshot for that render pass, and draws the geometry once per transform.

Path geometry uses canvas-style segments:
    ["M", x, y]                          move to
    ["L", x, y]                          line to
    ["C", c1x, c1y, c2x, c2y, x, y]      cubic bezier to
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from models.app_state import StyleSnapshot
from models.color import Color
from models.transform import AffineTransform, compose

logger = logging.getLogger(__name__)


class Surface(ABC):
    """Abstract drawing target.

    ``view`` is applied after every per-operation transform; exports use it to
    scale and shift the scene into a tile-sized image.
    """

    def __init__(self, width: int, height: int, view: Optional[AffineTransform] = None):
        self.width = int(width)
        self.height = int(height)
        self.view = view or AffineTransform.identity()

    @abstractmethod
    def clear(self):
        """Erase the whole surface."""
        pass

    @abstractmethod
    def draw_path(self, segments, style: StyleSnapshot, transforms,
                  closed: bool = False, fill: bool = False, stroke: bool = True):
        """Draw ``segments`` once for every transform in ``transforms``."""
        pass

    @abstractmethod
    def draw_circle(self, center, radius: float, style: StyleSnapshot, transforms,
                    fill: bool = True, stroke: bool = True):
        """Draw a circle once for every transform in ``transforms``."""
        pass

    def resize(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self.clear()


# ======================================================================
# Recording surface (headless, used by tests and dry runs)
# ======================================================================

@dataclass
class DrawCall:
    kind: str
    geometry: tuple
    style: StyleSnapshot
    transforms: tuple
    closed: bool = False
    fill: bool = False
    stroke: bool = True


@dataclass
class _RecordingState:
    calls: List[DrawCall] = field(default_factory=list)
    clear_count: int = 0


class RecordingSurface(Surface):
    """Surface that records draw calls instead of rasterizing them."""

    def __init__(self, width: int = 800, height: int = 600, view: Optional[AffineTransform] = None):
        super().__init__(width, height, view)
        self._state = _RecordingState()

    @property
    def calls(self) -> List[DrawCall]:
        return self._state.calls

    @property
    def clear_count(self) -> int:
        return self._state.clear_count

    def clear(self):
        self._state.calls.clear()
        self._state.clear_count += 1

    def draw_path(self, segments, style, transforms, closed=False, fill=False, stroke=True):
        geometry = tuple(tuple(seg) for seg in segments)
        self._state.calls.append(
            DrawCall('path', geometry, style, tuple(transforms), closed, fill, stroke))

    def draw_circle(self, center, radius, style, transforms, fill=True, stroke=True):
        geometry = (tuple(center), float(radius))
        self._state.calls.append(
            DrawCall('circle', geometry, style, tuple(transforms), False, fill, stroke))


# ======================================================================
# QPainter surfaces
# ======================================================================

class _PainterSurface(Surface):
    """Shared QPainter drawing for raster and vector targets.

    Subclasses supply the paint device through _open_painter()/_close_painter().
    """

    _CAPS = {'butt': 'FlatCap', 'round': 'RoundCap', 'square': 'SquareCap'}
    _JOINS = {'round': 'RoundJoin', 'bevel': 'BevelJoin', 'miter': 'MiterJoin'}

    @abstractmethod
    def _open_painter(self):
        pass

    @abstractmethod
    def _close_painter(self, painter):
        pass

    def _begin(self, style: StyleSnapshot):
        from PyQt5.QtCore import Qt
        from PyQt5.QtGui import QBrush, QPen

        painter = self._open_painter()

        stroke = Color.from_css(style.stroke_style) or Color(0, 0, 0)
        pen = QPen(stroke.to_qcolor())
        pen.setWidthF(style.line_width)
        pen.setCapStyle(getattr(Qt, self._CAPS.get(style.line_cap, 'FlatCap')))
        pen.setJoinStyle(getattr(Qt, self._JOINS.get(style.line_join, 'RoundJoin')))
        pen.setMiterLimit(style.miter_limit)

        fill = Color.from_css(style.fill_style) or Color(0, 0, 0, 0.0)
        return painter, pen, QBrush(fill.to_qcolor())

    def _set_transform(self, painter, transform: AffineTransform):
        from PyQt5.QtGui import QTransform
        m = compose(self.view, transform)
        painter.setTransform(QTransform(m.a, m.b, m.c, m.d, m.e, m.f))

    @staticmethod
    def _build_path(segments, closed):
        from PyQt5.QtGui import QPainterPath
        path = QPainterPath()
        for seg in segments:
            cmd = seg[0]
            if cmd == 'M':
                path.moveTo(seg[1], seg[2])
            elif cmd == 'L':
                path.lineTo(seg[1], seg[2])
            elif cmd == 'C':
                path.cubicTo(seg[1], seg[2], seg[3], seg[4], seg[5], seg[6])
            else:
                raise ValueError(f"Unknown path segment '{cmd}'")
        if closed:
            path.closeSubpath()
        return path

    def draw_path(self, segments, style, transforms, closed=False, fill=False, stroke=True):
        from PyQt5.QtCore import Qt
        path = self._build_path(segments, closed)
        painter, pen, brush = self._begin(style)
        try:
            painter.setPen(pen if stroke else Qt.NoPen)
            painter.setBrush(brush if fill else Qt.NoBrush)
            for transform in transforms:
                self._set_transform(painter, transform)
                painter.drawPath(path)
        finally:
            self._close_painter(painter)

    def draw_circle(self, center, radius, style, transforms, fill=True, stroke=True):
        from PyQt5.QtCore import QPointF, Qt
        painter, pen, brush = self._begin(style)
        try:
            painter.setPen(pen if stroke else Qt.NoPen)
            painter.setBrush(brush if fill else Qt.NoBrush)
            c = QPointF(center[0], center[1])
            for transform in transforms:
                self._set_transform(painter, transform)
                painter.drawEllipse(c, radius, radius)
        finally:
            self._close_painter(painter)


class QImageSurface(_PainterSurface):
    """Rasterizes onto a QImage with QPainter.

    Needs a Qt GUI application instance for QImage painting; callers outside
    the editor window create one (see headless.py).
    """

    def __init__(self, width: int, height: int, view: Optional[AffineTransform] = None,
                 background: Optional[str] = None):
        super().__init__(width, height, view)
        self.background = background
        self.image = None
        self._allocate()

    def _allocate(self):
        from PyQt5.QtGui import QImage
        self.image = QImage(max(1, self.width), max(1, self.height),
                            QImage.Format_ARGB32_Premultiplied)
        self.clear()

    def resize(self, width, height):
        self.width = int(width)
        self.height = int(height)
        self._allocate()

    def clear(self):
        from PyQt5.QtCore import Qt
        if self.background:
            self.image.fill(Color.from_css(self.background).to_qcolor())
        else:
            self.image.fill(Qt.transparent)

    def _open_painter(self):
        from PyQt5.QtGui import QPainter
        painter = QPainter(self.image)
        painter.setRenderHint(QPainter.Antialiasing)
        return painter

    def _close_painter(self, painter):
        painter.end()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_array(self) -> np.ndarray:
        """Copy the image into an (height, width, 4) uint8 RGBA array."""
        from PyQt5.QtGui import QImage
        rgba = self.image.convertToFormat(QImage.Format_RGBA8888)
        width, height = rgba.width(), rgba.height()
        ptr = rgba.constBits()
        ptr.setsize(rgba.bytesPerLine() * height)
        rows = np.frombuffer(ptr, dtype=np.uint8).reshape(height, rgba.bytesPerLine())
        return rows[:, :width * 4].reshape(height, width, 4).copy()

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.to_array(), "RGBA")

    def save_png(self, output_path: str) -> Tuple[int, int]:
        """Write the surface to a PNG file.

        Returns:
            (width, height) of the written image
        """
        img = self.to_pil()
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        img.save(output_path, "PNG")
        logger.info("Saved %dx%d PNG to %s", img.width, img.height, output_path)
        return img.size


class SvgSurface(_PainterSurface):
    """Writes vector output through QSvgGenerator.

    One painter stays open for the whole export; every draw call is wrapped in
    save()/restore(). Call finish() to flush the file.
    """

    def __init__(self, filename: str, width: int, height: int,
                 view: Optional[AffineTransform] = None, background: Optional[str] = None,
                 title: str = "Eschersketch"):
        from PyQt5.QtCore import QRect, QSize
        from PyQt5.QtSvg import QSvgGenerator

        super().__init__(width, height, view)
        self.filename = filename
        self.background = background
        self.generator = QSvgGenerator()
        self.generator.setFileName(filename)
        self.generator.setSize(QSize(self.width, self.height))
        self.generator.setViewBox(QRect(0, 0, self.width, self.height))
        self.generator.setTitle(title)
        self._painter = None

    def _start(self):
        from PyQt5.QtCore import QRectF
        from PyQt5.QtGui import QPainter

        os.makedirs(os.path.dirname(self.filename) or ".", exist_ok=True)
        self._painter = QPainter(self.generator)
        self._painter.setRenderHint(QPainter.Antialiasing)
        if self.background:
            self._painter.fillRect(QRectF(0, 0, self.width, self.height),
                                   Color.from_css(self.background).to_qcolor())

    def clear(self):
        if self._painter is not None:
            raise RuntimeError("An SVG surface cannot be cleared once drawing has started")

    def resize(self, width, height):
        raise RuntimeError("An SVG surface has a fixed size")

    def _open_painter(self):
        if self._painter is None:
            self._start()
        self._painter.save()
        return self._painter

    def _close_painter(self, painter):
        painter.restore()

    def finish(self) -> Tuple[int, int]:
        """Close the painter and write the file.

        Returns:
            (width, height) of the document
        """
        if self._painter is None:
            self._start()
        self._painter.end()
        logger.info("Saved %dx%d SVG to %s", self.width, self.height, self.filename)
        return self.width, self.height
