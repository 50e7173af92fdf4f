# PyQt6 front end for the fractal tree studio.
# Left: the 1000x650 canvas with Draw / Random / Download PNG buttons.
# Right: theme, color preset, grow and wind toggles and the shape sliders.
# Every edit produces a new TreeConfig which is handed to the TreeAnimator.

import sys
import logging
from dataclasses import replace

from PyQt6.QtWidgets import (
    QApplication, QWidget, QLabel, QVBoxLayout, QHBoxLayout,
    QComboBox, QPushButton, QSlider, QCheckBox, QFrame, QMessageBox,
    QScrollArea, QFileDialog,
)
from PyQt6.QtGui import QPixmap, QImage
from PyQt6.QtCore import Qt, QTimer

from PIL.ImageQt import ImageQt

from fractal_core import (
    CANVAS_WIDTH, CANVAS_HEIGHT, FRAME_INTERVAL_MS, SLIDER_RANGES, TreeConfig,
)
from palette_worker import PAGE_COLORS, list_presets, list_themes
from render_worker import new_surface
from animation import TreeAnimator

_LOGGER = logging.getLogger("fractal_tree.qt")

FLOAT_STEPS = 1000
# delay before slider edits are applied
CONFIG_DEBOUNCE_MS = 30


class QtFrameScheduler:
    """One single-shot QTimer per requested frame; the timer is the handle."""

    def __init__(self, parent, interval_ms=FRAME_INTERVAL_MS):
        self._parent = parent
        self.interval_ms = interval_ms

    def request_frame(self, callback):
        timer = QTimer(self._parent)
        timer.setSingleShot(True)

        def _fire():
            timer.deleteLater()
            callback()

        timer.timeout.connect(_fire)
        timer.start(self.interval_ms)
        return timer

    def cancel_frame(self, handle):
        handle.stop()
        handle.deleteLater()


class FractalTreeQtMain(QWidget):
    def __init__(self, config=None):
        super().__init__()
        self.setWindowTitle("Fractal Tree Studio (PyQt6)")
        self.resize(1400, 760)

        self.surface = new_surface(CANVAS_WIDTH, CANVAS_HEIGHT)
        self.animator = TreeAnimator(
            QtFrameScheduler(self),
            surface=self.surface,
            config=config or TreeConfig(),
            on_frame=self._on_frame_ready,
        )

        # timer for debouncing slider updates
        self.config_timer = QTimer(self)
        self.config_timer.setSingleShot(True)
        self.config_timer.timeout.connect(self._apply_controls)

        layout = QHBoxLayout(self)
        layout.addLayout(self._build_canvas_panel(), 3)
        layout.addWidget(self._build_controls_panel(), 1)

        self._sync_controls(self.animator.config)
        self._apply_page_color(self.animator.config.theme)

        # initial build and loop
        self.animator.rebuild()
        self.animator.start()

    # --- layout ---
    def _build_canvas_panel(self):
        panel = QVBoxLayout()
        title = QLabel("Fractal Tree Generator")
        title.setStyleSheet("color: #ecf0f1; font-size: 20px; font-weight: 600;")
        subtitle = QLabel("Wind sway + growing animation + seasonal color presets")
        subtitle.setStyleSheet("color: #94a3b8;")
        panel.addWidget(title)
        panel.addWidget(subtitle)

        self.canvas = QLabel()
        self.canvas.setFixedSize(CANVAS_WIDTH, CANVAS_HEIGHT)
        panel.addWidget(self.canvas)

        actions = QHBoxLayout()
        draw_btn = QPushButton("Draw")
        draw_btn.clicked.connect(self._on_draw)
        random_btn = QPushButton("Random")
        random_btn.clicked.connect(self._on_randomize)
        export_btn = QPushButton("Download PNG")
        export_btn.clicked.connect(self._on_export)
        for btn in (draw_btn, random_btn, export_btn):
            actions.addWidget(btn)
        actions.addStretch(1)
        panel.addLayout(actions)
        panel.addStretch(1)
        return panel

    def _build_controls_panel(self):
        controls_panel = QFrame()
        controls_panel.setStyleSheet(
            "background: qlineargradient(x1:0,y1:0,x2:0,y2:1, stop:0 #1e293b, stop:1 #0f172a);"
            "border: 1px solid #334155; border-radius: 6px; color: #ecf0f1;"
        )
        outer = QVBoxLayout(controls_panel)
        outer.addWidget(QLabel("Controls"))

        controls_widget = QWidget()
        controls_layout = QVBoxLayout(controls_widget)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(controls_widget)
        scroll.setStyleSheet("border: none; background: transparent;")
        outer.addWidget(scroll)

        controls_layout.addWidget(QLabel("Theme"))
        self.theme_combo = QComboBox()
        self.theme_combo.addItems(list_themes())
        self.theme_combo.currentTextChanged.connect(self._schedule_apply)
        controls_layout.addWidget(self.theme_combo)

        controls_layout.addWidget(QLabel("Color Preset"))
        self.preset_combo = QComboBox()
        self.preset_combo.addItems(list_presets())
        self.preset_combo.currentTextChanged.connect(self._schedule_apply)
        controls_layout.addWidget(self.preset_combo)

        self.grow_check = self._create_check(controls_layout, "Growing Animation")
        self.sliders = {}
        self._create_slider(controls_layout, "Grow Speed", 'grow_speed')

        self.wind_check = self._create_check(controls_layout, "Wind Animation")
        self._create_slider(controls_layout, "Wind Strength", 'wind_strength', suffix='°')
        self._create_slider(controls_layout, "Wind Speed", 'wind_speed', is_float=True, suffix='x')

        self._create_slider(controls_layout, "Depth", 'depth')
        self._create_slider(controls_layout, "Angle", 'angle', suffix='°')
        self._create_slider(controls_layout, "Branch Length", 'length')
        self._create_slider(controls_layout, "Shrink Factor", 'shrink', is_float=True)
        self._create_slider(controls_layout, "Thickness", 'thickness')
        self._create_slider(controls_layout, "Randomness", 'randomness', suffix='°')

        self.leaf_check = self._create_check(controls_layout, "Leaf Mode")

        tip = QLabel("Tip: try preset Neon + Wind ON + Grow ON.")
        tip.setWordWrap(True)
        controls_layout.addWidget(tip)
        controls_layout.addStretch(1)
        return controls_panel

    def _create_check(self, parent_layout, label_text):
        check = QCheckBox(label_text)
        check.toggled.connect(self._schedule_apply)
        parent_layout.addWidget(check)
        return check

    # helper to create a slider mapped to SLIDER_RANGES[name]
    def _create_slider(self, parent_layout, label_text, name, is_float=False, suffix=''):
        amin, amax = SLIDER_RANGES[name]
        row = QHBoxLayout()
        row.addWidget(QLabel(label_text))
        value_label = QLabel()
        row.addStretch(1)
        row.addWidget(value_label)
        parent_layout.addLayout(row)

        slider = QSlider(Qt.Orientation.Horizontal)
        if is_float:
            slider.setMinimum(0)
            slider.setMaximum(FLOAT_STEPS)
        else:
            slider.setMinimum(int(amin))
            slider.setMaximum(int(amax))
        slider.valueChanged.connect(self._schedule_apply)
        parent_layout.addWidget(slider)
        self.sliders[name] = (slider, is_float, value_label, suffix)
        return slider

    # --- slider <-> value mapping ---
    def _slider_value(self, name):
        slider, is_float, _label, _suffix = self.sliders[name]
        if not is_float:
            return slider.value()
        amin, amax = SLIDER_RANGES[name]
        return round(amin + (amax - amin) * (slider.value() / FLOAT_STEPS), 2)

    def _set_slider_value(self, name, value):
        slider, is_float, _label, _suffix = self.sliders[name]
        if is_float:
            amin, amax = SLIDER_RANGES[name]
            t = int(round((value - amin) / (amax - amin) * FLOAT_STEPS)) if amax != amin else 0
            slider.setValue(max(0, min(FLOAT_STEPS, t)))
        else:
            slider.setValue(int(round(value)))

    def _refresh_value_labels(self):
        for name, (_slider, is_float, label, suffix) in self.sliders.items():
            value = self._slider_value(name)
            text = f"{value:.2f}" if is_float else str(value)
            label.setText(f"{text}{suffix}")

    def _sync_controls(self, config):
        widgets = [self.theme_combo, self.preset_combo, self.grow_check, self.wind_check, self.leaf_check]
        widgets += [entry[0] for entry in self.sliders.values()]
        for w in widgets:
            w.blockSignals(True)
        try:
            self.theme_combo.setCurrentText(config.theme)
            self.preset_combo.setCurrentText(config.preset)
            self.grow_check.setChecked(config.grow_animation)
            self.wind_check.setChecked(config.animate_wind)
            self.leaf_check.setChecked(config.leaf_mode)
            for name in self.sliders:
                self._set_slider_value(name, getattr(config, name))
        finally:
            for w in widgets:
                w.blockSignals(False)
        self._refresh_value_labels()

    def _controls_config(self):
        cfg = self.animator.config
        return replace(
            cfg,
            depth=self._slider_value('depth'),
            angle=float(self._slider_value('angle')),
            length=float(self._slider_value('length')),
            shrink=self._slider_value('shrink'),
            thickness=float(self._slider_value('thickness')),
            randomness=float(self._slider_value('randomness')),
            leaf_mode=self.leaf_check.isChecked(),
            preset=self.preset_combo.currentText(),
            animate_wind=self.wind_check.isChecked(),
            wind_strength=float(self._slider_value('wind_strength')),
            wind_speed=self._slider_value('wind_speed'),
            grow_animation=self.grow_check.isChecked(),
            grow_speed=self._slider_value('grow_speed'),
            theme=self.theme_combo.currentText(),
        ).clamped()

    # --- handlers ---
    def _schedule_apply(self, *_args):
        self._refresh_value_labels()
        self.config_timer.start(CONFIG_DEBOUNCE_MS)

    def _apply_controls(self):
        changed = self.animator.update_config(self._controls_config())
        if 'theme' in changed:
            self._apply_page_color(self.animator.config.theme)
        _LOGGER.debug("config changed: %s", changed)

    def _apply_page_color(self, theme):
        color = PAGE_COLORS.get(theme, PAGE_COLORS['snow'])
        self.setStyleSheet(f"FractalTreeQtMain {{ background: {color}; }}")

    def _on_draw(self):
        self.config_timer.stop()
        self.animator.update_config(self._controls_config())
        self.animator.draw_once()

    def _on_randomize(self):
        self.config_timer.stop()
        self.animator.randomize()
        self._sync_controls(self.animator.config)

    def _on_export(self):
        path, _filter = QFileDialog.getSaveFileName(self, "Download PNG", "fractal-tree.png", "PNG Images (*.png)")
        if not path:
            return
        try:
            self.animator.export_png(path)
        except (OSError, ValueError) as e:
            _LOGGER.exception("PNG export failed")
            QMessageBox.critical(self, 'Export Error', f'Export failed:\n{e}')

    def _on_frame_ready(self, surface):
        # Convert PIL Image to QPixmap and show it on the canvas label
        qimage = ImageQt(surface).copy()
        self.canvas.setPixmap(QPixmap.fromImage(QImage(qimage)))

    def cleanup(self):
        self.config_timer.stop()
        self.animator.teardown()

    def closeEvent(self, event):
        self.cleanup()
        super().closeEvent(event)


def main():
    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    try:
        app = QApplication(sys.argv)
    except Exception as e:
        print("PyQt6 not installed or failed to initialize:", e)
        return

    w = FractalTreeQtMain()
    # Stop the frame loop before Qt tears the widgets down
    app.aboutToQuit.connect(w.cleanup)
    w.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
