import logging
import os
from typing import Dict, Optional

from PIL import Image
from PySide6 import QtCore, QtGui, QtWidgets

from charview.config.presets import CUSTOM_PRESET, preset_choices
from charview.config.session import SettingsSession
from charview.config.settings import CharViewSettings
from charview.core.classify import DIGIT, UPPER, LOWER, SYMBOL, SPACE
from charview.core.model import RenderModel
from charview.render.export import html_export, svg_embed_png, svg_text_export
from charview.render.rendering import render_model_to_rgba
from charview.utils.fonts import css_size_to_px, list_font_files, preferred_font_path, safe_load_pil_font
from charview.utils.theme import color_button_style

logger = logging.getLogger(__name__)

RENDER_DEBOUNCE_MS = 120

SAMPLE_TEXT = 'title: "Hello"\nHello, World! 123\n\n\tx = a_b + 7;'

COLOR_ROWS = [
    (DIGIT, "Numbers color", "Color used for digits (0-9)."),
    (UPPER, "Uppercase color", "Color used for uppercase letters."),
    (LOWER, "Lowercase color", "Color used for lowercase letters."),
    (SYMBOL, "Symbol color", "Color used for punctuation and symbols."),
    (SPACE, "Space color", "Color used for space boxes and empty-line markers."),
]


def pil_to_qimage(img: Image.Image) -> QtGui.QImage:
    rgba = img.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    qimg = QtGui.QImage(data, rgba.size[0], rgba.size[1], QtGui.QImage.Format_RGBA8888)
    return qimg.copy()


class ImageView(QtWidgets.QLabel):
    def __init__(self):
        super().__init__()
        self.setAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignTop)
        self.setMinimumSize(320, 220)
        self.setStyleSheet("QLabel { background: #0F0F12; border-radius: 10px; border: 1px solid #2B2B30; }")

    def set_image(self, qimage: Optional[QtGui.QImage]):
        self.setPixmap(QtGui.QPixmap.fromImage(qimage) if qimage is not None else QtGui.QPixmap())
        if qimage is not None:
            self.resize(qimage.size())


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, session: SettingsSession):
        super().__init__()
        self.setWindowTitle("Character View")
        self.resize(1280, 820)

        self.session = session
        self.session.subscribe(self.on_settings_changed)
        self.last_model: Optional[RenderModel] = None
        self.last_image: Optional[Image.Image] = None

        self.font_files = list_font_files()
        self.font_map: Dict[str, str] = {lbl: p for lbl, p in self.font_files}

        self.render_timer = QtCore.QTimer(self)
        self.render_timer.setSingleShot(True)
        self.render_timer.timeout.connect(self.render_now)

        self._build_ui()
        self._sync_widgets(self.session.settings)
        self.editor.setPlainText(SAMPLE_TEXT)

    def _build_ui(self):
        central = QtWidgets.QWidget()
        self.setCentralWidget(central)
        root = QtWidgets.QHBoxLayout(central)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(12)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        root.addWidget(splitter)

        # LEFT: source + preview
        left = QtWidgets.QSplitter(QtCore.Qt.Vertical)
        self.editor = QtWidgets.QPlainTextEdit()
        self.editor.setFont(QtGui.QFont("Consolas", 11))
        self.editor.setPlaceholderText('title: "My block"\nType text here…')
        self.editor.textChanged.connect(self.schedule_render)
        left.addWidget(self.editor)

        self.render_view = ImageView()
        preview = QtWidgets.QScrollArea()
        preview.setWidget(self.render_view)
        left.addWidget(preview)
        left.setSizes([260, 560])
        splitter.addWidget(left)

        # RIGHT: settings
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        container = QtWidgets.QWidget()
        self.controls_layout = QtWidgets.QVBoxLayout(container)
        self.controls_layout.setContentsMargins(0, 0, 0, 0)
        self.controls_layout.setSpacing(10)
        scroll.setWidget(container)
        splitter.addWidget(scroll)
        splitter.setSizes([820, 460])

        self.status = QtWidgets.QStatusBar()
        self.setStatusBar(self.status)

        self._build_groups()
        self.controls_layout.addStretch(1)

    def _build_groups(self):
        # File
        g_file = QtWidgets.QGroupBox("File")
        h = QtWidgets.QHBoxLayout(g_file)
        for text, slot in (("Open", self.open_text), ("Export PNG", self.export_png),
                           ("Export SVG…", self.export_svg), ("Export HTML", self.export_html)):
            btn = QtWidgets.QPushButton(text)
            btn.clicked.connect(slot)
            h.addWidget(btn)
        h.addStretch(1)
        self.controls_layout.addWidget(g_file)

        # Display options
        g_display = QtWidgets.QGroupBox("Display Options")
        grid = QtWidgets.QGridLayout(g_display)

        self.chk_stats = QtWidgets.QCheckBox("Show statistics")
        self.chk_stats.setToolTip("Display character count statistics below the block.")
        self.chk_stats.toggled.connect(lambda v: self._update(self.session.set_option, "show_statistics", v))
        grid.addWidget(self.chk_stats, 0, 0, 1, 2)

        self.chk_key = QtWidgets.QCheckBox("Show color key")
        self.chk_key.setToolTip("Display a legend showing what each color represents.")
        self.chk_key.toggled.connect(lambda v: self._update(self.session.set_option, "show_color_key", v))
        grid.addWidget(self.chk_key, 1, 0, 1, 2)

        self.chk_title_upper = QtWidgets.QCheckBox("Title uppercase")
        self.chk_title_upper.toggled.connect(lambda v: self._update(self.session.set_option, "title_uppercase", v))
        grid.addWidget(self.chk_title_upper, 2, 0, 1, 2)

        grid.addWidget(QtWidgets.QLabel("Title font size"), 3, 0)
        self.txt_title_size = QtWidgets.QLineEdit()
        self.txt_title_size.setPlaceholderText("0.8rem")
        self.txt_title_size.editingFinished.connect(
            lambda: self._update(self.session.set_option, "title_font_size", self.txt_title_size.text().strip()))
        grid.addWidget(self.txt_title_size, 3, 1)

        self.chk_space_symbol = QtWidgets.QCheckBox("Show visible space symbol")
        self.chk_space_symbol.toggled.connect(lambda v: self._update(self.session.set_option, "show_space_symbol", v))
        grid.addWidget(self.chk_space_symbol, 4, 0, 1, 2)

        grid.addWidget(QtWidgets.QLabel("Space symbol"), 5, 0)
        self.txt_space_symbol = QtWidgets.QLineEdit()
        self.txt_space_symbol.setPlaceholderText("␣")
        self.txt_space_symbol.editingFinished.connect(
            lambda: self._update(self.session.set_option, "space_symbol", self.txt_space_symbol.text()))
        grid.addWidget(self.txt_space_symbol, 5, 1)
        self.controls_layout.addWidget(g_display)

        # Presets
        g_preset = QtWidgets.QGroupBox("Color Presets")
        h = QtWidgets.QHBoxLayout(g_preset)
        self.cmb_preset = QtWidgets.QComboBox()
        for key, name in preset_choices().items():
            self.cmb_preset.addItem(name, key)
        self.cmb_preset.addItem("Custom", CUSTOM_PRESET)
        self.cmb_preset.currentIndexChanged.connect(self.on_preset_selected)
        h.addWidget(self.cmb_preset, stretch=1)
        self.controls_layout.addWidget(g_preset)

        # Custom colors
        g_colors = QtWidgets.QGroupBox("Custom Colors")
        grid = QtWidgets.QGridLayout(g_colors)
        note = QtWidgets.QLabel('Changing these sets the preset to "Custom".')
        note.setStyleSheet("QLabel { color: #9A9AA5; }")
        grid.addWidget(note, 0, 0, 1, 2)
        self.color_buttons: Dict[str, QtWidgets.QPushButton] = {}
        for row, (cat, label, desc) in enumerate(COLOR_ROWS, start=1):
            lbl = QtWidgets.QLabel(label)
            lbl.setToolTip(desc)
            grid.addWidget(lbl, row, 0)
            btn = QtWidgets.QPushButton()
            btn.clicked.connect(lambda _checked=False, c=cat: self.pick_color(c))
            grid.addWidget(btn, row, 1)
            self.color_buttons[cat] = btn
        self.controls_layout.addWidget(g_colors)

        # Font
        g_font = QtWidgets.QGroupBox("Font")
        grid = QtWidgets.QGridLayout(g_font)
        self.cmb_font = QtWidgets.QComboBox()
        self.cmb_font.addItem("(Built-in)", "")
        for lbl, path in self.font_files:
            self.cmb_font.addItem(lbl, path)
        preferred = preferred_font_path()
        if preferred:
            self.cmb_font.setCurrentIndex(max(0, self.cmb_font.findData(preferred)))
        self.cmb_font.currentIndexChanged.connect(self.schedule_render)
        grid.addWidget(self.cmb_font, 0, 0)

        self.spin_font_size = QtWidgets.QSpinBox()
        self.spin_font_size.setRange(8, 64)
        self.spin_font_size.setValue(16)
        self.spin_font_size.valueChanged.connect(self.schedule_render)
        grid.addWidget(self.spin_font_size, 0, 1)

        self.chk_transparent = QtWidgets.QCheckBox("Transparent background")
        self.chk_transparent.toggled.connect(self.schedule_render)
        grid.addWidget(self.chk_transparent, 1, 0, 1, 2)
        self.controls_layout.addWidget(g_font)

    # ----------------------------
    # Settings <-> widgets
    # ----------------------------
    def _sync_widgets(self, s: CharViewSettings):
        widgets = [self.chk_stats, self.chk_key, self.chk_title_upper, self.chk_space_symbol,
                   self.txt_title_size, self.txt_space_symbol, self.cmb_preset]
        for w in widgets:
            w.blockSignals(True)
        self.chk_stats.setChecked(s.show_statistics)
        self.chk_key.setChecked(s.show_color_key)
        self.chk_title_upper.setChecked(s.title_uppercase)
        self.chk_space_symbol.setChecked(s.show_space_symbol)
        self.txt_title_size.setText(s.title_font_size)
        self.txt_space_symbol.setText(s.space_symbol)
        self.cmb_preset.setCurrentIndex(max(0, self.cmb_preset.findData(s.current_preset)))
        for w in widgets:
            w.blockSignals(False)

        for cat, btn in self.color_buttons.items():
            color = s.color_for(cat)
            btn.setText(color)
            btn.setStyleSheet(color_button_style(color))

    def on_settings_changed(self, settings: CharViewSettings):
        self._sync_widgets(settings)
        self.schedule_render()

    def on_preset_selected(self, index: int):
        key = self.cmb_preset.itemData(index)
        if key == CUSTOM_PRESET:
            # "Custom" is reached by editing a color, never picked directly
            self._sync_widgets(self.session.settings)
            return
        self._update(self.session.apply_preset, key)

    def pick_color(self, category: str):
        current = QtGui.QColor(self.session.settings.color_for(category))
        color = QtWidgets.QColorDialog.getColor(current, self, "Pick color")
        if not color.isValid():
            return
        self._update(self.session.set_color, category, color.name())

    def _update(self, setter, *args):
        try:
            setter(*args)
        except Exception as e:
            logger.exception("Saving settings failed")
            QtWidgets.QMessageBox.critical(self, "Settings error", str(e))
            self._sync_widgets(self.session.settings)

    # ----------------------------
    # Rendering
    # ----------------------------
    def schedule_render(self, *_args):
        self.render_timer.start(RENDER_DEBOUNCE_MS)

    def _fonts(self, model: RenderModel):
        path = self.cmb_font.currentData() or ""
        size = int(self.spin_font_size.value())
        font = safe_load_pil_font(path, size)
        title_font = safe_load_pil_font(path, css_size_to_px(model.title_font_size, base_px=size))
        return font, title_font

    def build_image(self, model: RenderModel) -> Image.Image:
        font, title_font = self._fonts(model)
        return render_model_to_rgba(
            model, font, title_font=title_font,
            transparent_bg=self.chk_transparent.isChecked(),
        )

    def render_now(self):
        model = self.session.render(self.editor.toPlainText())
        self.last_model = model
        if not model.lines and model.title is None:
            self.last_image = None
            self.render_view.set_image(None)
            self.status.showMessage("Nothing to render.")
            return
        try:
            self.last_image = self.build_image(model)
        except Exception:
            logger.exception("Render failed")
            self.status.showMessage("Render failed, see log.")
            return
        self.render_view.set_image(pil_to_qimage(self.last_image))
        cells = sum(len(row) for row in model.lines)
        self.status.showMessage(f"{len(model.lines)} lines | {cells} cells | preset: {self.session.settings.current_preset}")

    # ----------------------------
    # File operations
    # ----------------------------
    def open_text(self):
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Open Text", "", "Text (*.txt *.md);;All Files (*.*)")
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                self.editor.setPlainText(f.read())
            self.status.showMessage(f"Loaded: {os.path.basename(path)}")
        except Exception as e:
            logger.exception("Open failed for %s", path)
            QtWidgets.QMessageBox.critical(self, "Open error", str(e))

    def _ask_path(self, caption: str, default: str, filt: str, ext: str) -> Optional[str]:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, caption, default, filt)
        if not path:
            return None
        if not path.lower().endswith(ext):
            path += ext
        return path

    def export_png(self):
        if self.last_image is None:
            return
        path = self._ask_path("Export PNG", "charview.png", "PNG (*.png)", ".png")
        if not path:
            return
        try:
            self.last_image.save(path, format="PNG")
            self.status.showMessage(f"Exported: {os.path.basename(path)}")
        except Exception as e:
            logger.exception("PNG export failed")
            QtWidgets.QMessageBox.critical(self, "Export error", str(e))

    def export_html(self):
        if self.last_model is None:
            return
        path = self._ask_path("Export HTML", "charview.html", "HTML (*.html)", ".html")
        if not path:
            return
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(html_export(self.last_model))
            self.status.showMessage(f"Exported: {os.path.basename(path)}")
        except Exception as e:
            logger.exception("HTML export failed")
            QtWidgets.QMessageBox.critical(self, "Export error", str(e))

    def export_svg(self):
        if self.last_image is None or self.last_model is None:
            return

        msg = QtWidgets.QMessageBox(self)
        msg.setWindowTitle("Export SVG")
        msg.setText("Choose SVG export mode:")
        btn_text = msg.addButton("SVG (Text, editable)", QtWidgets.QMessageBox.AcceptRole)
        msg.addButton("SVG (Embedded PNG, reliable)", QtWidgets.QMessageBox.AcceptRole)
        btn_cancel = msg.addButton("Cancel", QtWidgets.QMessageBox.RejectRole)
        msg.exec()

        clicked = msg.clickedButton()
        if clicked is None or clicked == btn_cancel:
            return
        as_text = (clicked == btn_text)

        path = self._ask_path("Export SVG", "charview.svg", "SVG (*.svg)", ".svg")
        if not path:
            return
        transparent_bg = self.chk_transparent.isChecked()

        try:
            if as_text:
                font_size = int(self.spin_font_size.value())
                qfont = QtGui.QFont(self.cmb_font.currentText(), font_size)
                metrics = QtGui.QFontMetrics(qfont)
                svg = svg_text_export(
                    self.last_model,
                    font_family=qfont.family(),
                    font_size_px=font_size,
                    char_w=max(1, metrics.horizontalAdvance("M")),
                    line_h=max(1, metrics.height()),
                    transparent_bg=transparent_bg,
                )
            else:
                svg = svg_embed_png(self.last_image, transparent_bg=transparent_bg)
            with open(path, "w", encoding="utf-8") as f:
                f.write(svg)
            self.status.showMessage(f"Exported: {os.path.basename(path)}")
        except Exception as e:
            logger.exception("SVG export failed")
            QtWidgets.QMessageBox.critical(self, "Export error", str(e))
