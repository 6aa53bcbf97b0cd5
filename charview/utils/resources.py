import os
import sys
from PySide6 import QtCore, QtGui

from charview.config.presets import COLOR_PRESETS

APP_ID = "com.charview.viewer"


def project_root() -> str:
    # charview/utils/resources.py -> charview/utils -> charview -> project_root
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def resource_path(rel_path: str) -> str:
    """
    PyInstaller-safe: sys._MEIPASS in a frozen build, the project root otherwise.
    """
    base = getattr(sys, "_MEIPASS", project_root())
    return os.path.join(base, rel_path)


def set_windows_app_user_model_id(app_id: str = APP_ID):
    """
    Taskbar grouping on Windows. Call BEFORE QApplication.
    """
    if sys.platform.startswith("win"):
        import ctypes
        ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(app_id)


def _painted_icon(size: int = 64) -> QtGui.QIcon:
    # Two cells, "A" and "1", in the default preset colors
    preset = COLOR_PRESETS["default"]
    pix = QtGui.QPixmap(size, size)
    pix.fill(QtCore.Qt.transparent)
    p = QtGui.QPainter(pix)
    p.setRenderHint(QtGui.QPainter.Antialiasing)
    font = QtGui.QFont("Monospace", int(size * 0.3))
    font.setBold(True)
    p.setFont(font)
    half = size // 2
    for i, (glyph, color) in enumerate((("A", preset.upper_color), ("1", preset.number_color))):
        rect = QtCore.QRectF(2 + i * half, size * 0.25, half - 4, size * 0.5)
        p.setPen(QtGui.QPen(QtGui.QColor(color), 2))
        p.drawRoundedRect(rect, 6, 6)
        p.drawText(rect, QtCore.Qt.AlignCenter, glyph)
    p.end()
    return QtGui.QIcon(pix)


def load_app_icon() -> QtGui.QIcon:
    png = resource_path(os.path.join("assets", "charview.png"))
    if os.path.exists(png):
        return QtGui.QIcon(png)
    return _painted_icon()
