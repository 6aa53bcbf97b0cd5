import logging
import sys
from PySide6 import QtWidgets

from charview.config.session import open_session
from charview.ui import MainWindow
from charview.utils.theme import apply_dark_palette
from charview.utils.resources import set_windows_app_user_model_id, load_app_icon

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    set_windows_app_user_model_id()

    app = QtWidgets.QApplication(sys.argv)
    apply_dark_palette(app)

    icon = load_app_icon()
    app.setWindowIcon(icon)

    win = MainWindow(open_session())
    win.setWindowIcon(icon)

    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
