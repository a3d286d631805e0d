import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    # Get the directory containing this file (editor/src)
    current_dir = os.path.dirname(os.path.abspath(__file__))
    # Add it to the Python path
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import (
    QMainWindow, QFileDialog, QComboBox, QDoubleSpinBox, QLabel, QColorDialog,
    QAction, QToolBar, QStatusBar,
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence

# Component imports
from components.sketch_canvas import SketchCanvas

# Model / service imports
from models.color import Color
from controller import SketchController, DEFAULT_CONFIG_DIR
from drawing_tools import get_available_tools
from services.surfaces import QImageSurface
from services.file_operations import (
    read_sketch_text, save_sketch_to_file, export_png, export_svg, export_tile_png, export_tile_svg,
)
from services.symmetry_transforms import UnknownSymmetryError
from utils.logger import loggerRaise, set_main_window

from constants import (
    ALL_SYMMETRIES, CANVAS_WIDTH, CANVAS_HEIGHT, DELTA_LINEWIDTH,
    MAX_LINEWIDTH, MIN_LINEWIDTH, NO_SYMMETRY, ROSETTE_SYMMETRY,
    PNG_FILE_FILTER, SKETCH_FILE_FILTER, SVG_FILE_FILTER,
)


class EschersketchWindow(QMainWindow):
    def __init__(self, config_dir=DEFAULT_CONFIG_DIR):
        super().__init__()
        self.setWindowTitle("Eschersketch")
        self.resize(1280, 800)

        self.current_file_path = None
        self.is_saved = True

        # Initialize global logger with main window reference
        set_main_window(self)

        self.canvas = SketchCanvas(self)
        self.setCentralWidget(self.canvas)

        self.controller = SketchController(
            QImageSurface(CANVAS_WIDTH, CANVAS_HEIGHT),
            QImageSurface(CANVAS_WIDTH, CANVAS_HEIGHT),
            config_dir=config_dir,
        )
        self.controller.add_history_listener(self._on_history_changed)
        self.controller.add_param_listener(self._on_params_changed)
        self.canvas.set_controller(self.controller)

        self.setup_ui()
        self._on_params_changed(self.controller.state)
        self._on_history_changed(False, False)

    # ============= UI Setup =============

    def setup_ui(self):
        self._create_menu_bar()
        self._create_toolbar()
        self.status_label = QLabel("Ready")
        status_bar = QStatusBar()
        status_bar.addWidget(self.status_label)
        self.setStatusBar(status_bar)

    def _create_menu_bar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        self._add_action(file_menu, "&New", self.new_sketch, QKeySequence.New)
        self._add_action(file_menu, "&Open...", self.open_sketch, QKeySequence.Open)
        self.recent_menu = file_menu.addMenu("Recent Files")
        self._update_recent_files_menu()
        self._add_action(file_menu, "&Save", self.save_sketch, QKeySequence.Save)
        self._add_action(file_menu, "Save &As...", self.save_sketch_as, QKeySequence.SaveAs)
        file_menu.addSeparator()
        self._add_action(file_menu, "Export &PNG...", self.export_png)
        self._add_action(file_menu, "Export &SVG...", self.export_svg)
        self._add_action(file_menu, "Export &Tile PNG...", self.export_tile)
        self._add_action(file_menu, "Export Tile S&VG...", self.export_tile_svg)
        file_menu.addSeparator()
        self._add_action(file_menu, "E&xit", self.close)

        edit_menu = menubar.addMenu("&Edit")
        self.undo_action = self._add_action(edit_menu, "&Undo", self.undo, QKeySequence.Undo)
        self.redo_action = self._add_action(edit_menu, "&Redo", self.redo, QKeySequence.Redo)
        edit_menu.addSeparator()
        self._add_action(edit_menu, "Reset", self.new_sketch)

        view_menu = menubar.addMenu("&View")
        touch_action = self._add_action(view_menu, "Touch Handles", self._toggle_touch_mode)
        touch_action.setCheckable(True)

    def _add_action(self, menu, text, slot, shortcut=None):
        action = QAction(text, self)
        if shortcut is not None:
            action.setShortcut(shortcut)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    def _create_toolbar(self):
        toolbar = QToolBar("Tools")
        self.addToolBar(toolbar)

        toolbar.addWidget(QLabel(" Tool "))
        self.tool_combo = QComboBox()
        self.tool_combo.addItems(get_available_tools())
        self.tool_combo.currentTextChanged.connect(self._on_tool_selected)
        toolbar.addWidget(self.tool_combo)

        toolbar.addWidget(QLabel(" Symmetry "))
        self.symmetry_combo = QComboBox()
        self.symmetry_combo.addItems(ALL_SYMMETRIES)
        self.symmetry_combo.currentTextChanged.connect(self._on_symmetry_selected)
        toolbar.addWidget(self.symmetry_combo)

        toolbar.addWidget(QLabel(" Width "))
        self.width_spin = QDoubleSpinBox()
        self.width_spin.setRange(MIN_LINEWIDTH, MAX_LINEWIDTH)
        self.width_spin.setSingleStep(DELTA_LINEWIDTH)
        self.width_spin.valueChanged.connect(self._on_width_changed)
        toolbar.addWidget(self.width_spin)

        toolbar.addSeparator()
        stroke_action = toolbar.addAction("Stroke")
        stroke_action.triggered.connect(lambda: self._pick_color('stroke'))
        fill_action = toolbar.addAction("Fill")
        fill_action.triggered.connect(lambda: self._pick_color('fill'))

    # ============= Controller sync =============

    def _on_history_changed(self, can_undo, can_redo):
        """Called when history state changes to update UI"""
        self.undo_action.setEnabled(can_undo)
        self.redo_action.setEnabled(can_redo)
        self.status_label.setText(f"Operations: {len(self.controller.history)}")
        if can_undo:
            self.is_saved = False
            self._update_window_title()

    def _on_params_changed(self, state):
        """Reflect controller state in the toolbar without feeding back"""
        for widget, value in ((self.tool_combo, state.current_tool),
                              (self.symmetry_combo, state.symmetry.sym)):
            widget.blockSignals(True)
            widget.setCurrentText(value)
            widget.blockSignals(False)
        self.width_spin.blockSignals(True)
        self.width_spin.setValue(state.style.line_width)
        self.width_spin.blockSignals(False)
        self.canvas.update()

    def _on_tool_selected(self, name):
        self.controller.change_tool(name)
        self.canvas.setFocus()
        self.canvas.update()

    def _on_symmetry_selected(self, name):
        try:
            self.controller.update_symmetry(sym=name)
        except UnknownSymmetryError as e:
            loggerRaise(e, f"Unknown symmetry '{name}'")
        self.canvas.update()

    def _on_width_changed(self, value):
        self.controller.update_style(line_width=value)
        self.canvas.update()

    def _pick_color(self, target):
        current = getattr(self.controller.state.style, f'{target}_style')
        initial = Color.from_css(current) or Color(0, 0, 0)
        color = QColorDialog.getColor(initial.to_qcolor(), self, f"{target.title()} Color",
                                      QColorDialog.ShowAlphaChannel)
        if color.isValid():
            self.controller.set_color(target, color.red(), color.green(), color.blue(), color.alphaF())
            self.canvas.update()

    def _toggle_touch_mode(self, checked):
        self.controller.set_touch_mode(checked)
        self.canvas.update()

    # ============= History =============

    def undo(self):
        self.controller.undo()
        self.canvas.update()

    def redo(self):
        self.controller.redo()
        self.canvas.update()

    # ============= File operations =============

    def new_sketch(self):
        self.controller.reset()
        self.current_file_path = None
        self.is_saved = True
        self._update_window_title()
        self.canvas.update()

    def open_sketch(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Open Sketch", "", SKETCH_FILE_FILTER)
        if filepath:
            self._load_file(filepath)

    def _load_file(self, filepath):
        try:
            self.controller.deserialize(read_sketch_text(filepath))
        except Exception as e:
            loggerRaise(e, "Failed to open sketch")
        self.current_file_path = filepath
        self.is_saved = True
        self.controller._add_to_recent_files(filepath)
        self._update_recent_files_menu()
        self._update_window_title()
        self.canvas.update()

    def save_sketch(self):
        if self.current_file_path:
            self._save_file(self.current_file_path)
        else:
            self.save_sketch_as()

    def save_sketch_as(self):
        filepath, _ = QFileDialog.getSaveFileName(self, "Save Sketch", "", SKETCH_FILE_FILTER)
        if filepath:
            self._save_file(filepath)

    def _save_file(self, filepath):
        # Finish the live shape so it is part of the file
        self.controller.tool.commit()
        try:
            save_sketch_to_file(self.controller.history.entries, filepath)
        except Exception as e:
            loggerRaise(e, "Failed to save sketch")
        self.current_file_path = filepath
        self.is_saved = True
        self.controller._add_to_recent_files(filepath)
        self._update_recent_files_menu()
        self._update_window_title()

    def export_png(self):
        filepath, _ = QFileDialog.getSaveFileName(self, "Export PNG", "", PNG_FILE_FILTER)
        if not filepath:
            return
        self.controller.tool.commit()
        surface = self.controller.surface
        try:
            export_png(self.controller.history.visible_ops(), self.controller.transforms_for,
                       surface.width, surface.height, filepath)
        except Exception as e:
            loggerRaise(e, "Failed to export PNG")

    def export_svg(self):
        filepath, _ = QFileDialog.getSaveFileName(self, "Export SVG", "", SVG_FILE_FILTER)
        if not filepath:
            return
        self.controller.tool.commit()
        surface = self.controller.surface
        try:
            export_svg(self.controller.history.visible_ops(), self.controller.transforms_for,
                       surface.width, surface.height, filepath)
        except Exception as e:
            loggerRaise(e, "Failed to export SVG")

    def export_tile(self):
        self._export_tile("Export Tile PNG", PNG_FILE_FILTER, export_tile_png)

    def export_tile_svg(self):
        self._export_tile("Export Tile SVG", SVG_FILE_FILTER, export_tile_svg)

    def _export_tile(self, caption, file_filter, exporter):
        symmetry = self.controller.state.symmetry
        if symmetry.sym in (NO_SYMMETRY, ROSETTE_SYMMETRY):
            self.status_label.setText("Tile export needs a tiling symmetry")
            return
        filepath, _ = QFileDialog.getSaveFileName(self, caption, "", file_filter)
        if not filepath:
            return
        self.controller.tool.commit()
        try:
            exporter(self.controller.history.visible_ops(), self.controller.transforms_for,
                     symmetry, filepath)
        except Exception as e:
            loggerRaise(e, "Failed to export tile")

    def _update_recent_files_menu(self):
        """Update the Recent Files submenu"""
        self.recent_menu.clear()
        recent_files = self.controller.recent_files
        if not recent_files:
            no_recent = self.recent_menu.addAction("No recent files")
            no_recent.setEnabled(False)
            return

        for filepath in recent_files:
            action = self.recent_menu.addAction(os.path.basename(filepath))
            action.setToolTip(filepath)
            # Use lambda with default argument to capture filepath
            action.triggered.connect(lambda checked, f=filepath: self._load_file(f))

        self.recent_menu.addSeparator()
        clear_action = self.recent_menu.addAction("Clear Recent Files")
        clear_action.triggered.connect(self._clear_recent_files)

    def _clear_recent_files(self):
        self.controller._clear_recent_files()
        self._update_recent_files_menu()

    def _update_window_title(self):
        """Update window title with current file name"""
        name = os.path.basename(self.current_file_path) if self.current_file_path else "Untitled"
        modified = "" if self.is_saved else "*"
        self.setWindowTitle(f"{name}{modified} - Eschersketch")


def main():
    """Main entry point for the Eschersketch application"""
    app = QtWidgets.QApplication([])
    app.setStyle("Fusion")

    window = EschersketchWindow()
    window.show()
    app.exec_()


if __name__ == "__main__":
    main()
