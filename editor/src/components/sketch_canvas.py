"""Canvas widget: two stacked QImage layers plus input translation.

The widget owns no drawing state. It paints the controller's persistent and
live surfaces and forwards Qt input as PointerEvent/KeyEvent.
"""

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter
from PyQt5.QtWidgets import QWidget

from models.input_events import KeyEvent, PointerEvent

_KEY_NAMES = {
    Qt.Key_Return: 'Enter',
    Qt.Key_Enter: 'Enter',
    Qt.Key_Escape: 'Escape',
    Qt.Key_Backspace: 'Backspace',
    Qt.Key_Delete: 'Delete',
}


class SketchCanvas(QWidget):
    """Paints the sketch layers and routes input to a SketchController"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.controller = None
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAttribute(Qt.WA_OpaquePaintEvent, False)

    def set_controller(self, controller):
        self.controller = controller
        self.update()

    # ========================================
    # Painting
    # ========================================

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.white)
        if self.controller is not None:
            painter.drawImage(0, 0, self.controller.surface.image)
            painter.drawImage(0, 0, self.controller.live_surface.image)
        painter.end()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.controller is not None:
            size = event.size()
            self.controller.resize(size.width(), size.height())
            self.update()

    # ========================================
    # Input translation
    # ========================================

    @staticmethod
    def _pointer(event):
        modifiers = event.modifiers()
        return PointerEvent(
            x=event.pos().x(),
            y=event.pos().y(),
            button=int(event.button()) if hasattr(event, 'button') else 0,
            shift=bool(modifiers & Qt.ShiftModifier),
            ctrl=bool(modifiers & Qt.ControlModifier),
        )

    def mousePressEvent(self, event):
        if self.controller is None or event.button() != Qt.LeftButton:
            return
        self.controller.mouse_down(self._pointer(event))
        self.update()

    def mouseMoveEvent(self, event):
        if self.controller is None:
            return
        self.controller.mouse_move(self._pointer(event))
        self.update()

    def mouseReleaseEvent(self, event):
        if self.controller is None or event.button() != Qt.LeftButton:
            return
        self.controller.mouse_up(self._pointer(event))
        self.update()

    def leaveEvent(self, event):
        if self.controller is not None:
            self.controller.mouse_leave(None)
            self.update()
        super().leaveEvent(event)

    def keyPressEvent(self, event):
        if self.controller is None:
            return super().keyPressEvent(event)

        code = event.key()
        if Qt.Key_A <= code <= Qt.Key_Z:
            # text() holds a control character while Ctrl is down
            key = chr(code).lower()
        else:
            key = _KEY_NAMES.get(code, event.text())
        if not key:
            return super().keyPressEvent(event)

        modifiers = event.modifiers()
        handled = self.controller.key_down(KeyEvent(
            key=key,
            ctrl=bool(modifiers & Qt.ControlModifier),
            shift=bool(modifiers & Qt.ShiftModifier),
        ))
        if handled:
            self.update()
        else:
            super().keyPressEvent(event)
