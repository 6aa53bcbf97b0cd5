from PySide6 import QtGui, QtWidgets

WINDOW_BG = "#141416"
PANEL_BORDER = "#2B2B30"


def apply_dark_palette(app: QtWidgets.QApplication):
    palette = QtGui.QPalette()
    base = QtGui.QColor(20, 20, 22)
    alt = QtGui.QColor(28, 28, 32)
    text = QtGui.QColor(230, 230, 235)
    disabled = QtGui.QColor(150, 150, 160)

    palette.setColor(QtGui.QPalette.Window, base)
    palette.setColor(QtGui.QPalette.WindowText, text)
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor(16, 16, 18))
    palette.setColor(QtGui.QPalette.AlternateBase, alt)
    palette.setColor(QtGui.QPalette.Text, text)
    palette.setColor(QtGui.QPalette.Button, alt)
    palette.setColor(QtGui.QPalette.ButtonText, text)
    palette.setColor(QtGui.QPalette.ToolTipBase, alt)
    palette.setColor(QtGui.QPalette.ToolTipText, text)
    palette.setColor(QtGui.QPalette.Highlight, QtGui.QColor(72, 122, 255))
    palette.setColor(QtGui.QPalette.HighlightedText, QtGui.QColor(255, 255, 255))
    palette.setColor(QtGui.QPalette.Disabled, QtGui.QPalette.WindowText, disabled)
    palette.setColor(QtGui.QPalette.Disabled, QtGui.QPalette.Text, disabled)
    palette.setColor(QtGui.QPalette.Disabled, QtGui.QPalette.ButtonText, disabled)
    app.setPalette(palette)

    app.setStyleSheet(f"""
        QMainWindow {{ background: {WINDOW_BG}; }}
        QGroupBox {{
            border: 1px solid {PANEL_BORDER};
            border-radius: 10px;
            margin-top: 10px;
            padding: 10px;
        }}
        QGroupBox::title {{ subcontrol-origin: margin; left: 10px; padding: 0 6px; }}
        QPushButton {{
            background: #2A2A31; border: 1px solid #3A3A44;
            padding: 8px 10px; border-radius: 10px;
        }}
        QPushButton:hover {{ background: #343440; }}
        QPushButton:pressed {{ background: #202026; }}
        QComboBox, QSpinBox, QLineEdit {{
            background: #1A1A1E; border: 1px solid #3A3A44;
            padding: 6px; border-radius: 10px;
        }}
        QPlainTextEdit {{
            background: #101012; border: 1px solid {PANEL_BORDER};
            border-radius: 10px;
        }}
        QScrollArea {{ border: none; }}
        QToolTip {{ background: #1C1C20; border: 1px solid {PANEL_BORDER}; padding: 4px; }}
    """)


def color_button_style(hex_color: str) -> str:
    return (
        f"QPushButton {{ background: {hex_color}; border: 1px solid #3A3A44; "
        f"border-radius: 8px; min-width: 48px; min-height: 20px; }}"
    )
