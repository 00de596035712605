import argparse
import sys
from PySide6.QtWidgets import QApplication

from app.config import resolve_settings
from artifacts.logger import RunLogger
from ui.main_window import MainWindow

APP_NAME = "Terminal Server File Copy"

def run_app(argv=None):
    parser = argparse.ArgumentParser(prog="tscopy-gui")
    parser.add_argument("--config", help="Config file (json or yaml)")
    args, qt_args = parser.parse_known_args(argv if argv is not None else sys.argv[1:])

    settings = resolve_settings(args.config)
    run_logger = RunLogger(settings["log_file"]) if settings.get("log_file") else None

    app = QApplication([sys.argv[0], *qt_args])
    app.setStyle("Fusion")

    app.setStyleSheet("""
        QMainWindow { background-color: #f6f7f9; }
        QGroupBox { background: #ffffff; border: 1px solid #dcdfe4; border-radius: 10px; margin-top: 14px; }
        QLineEdit { background: #ffffff; border: 1px solid #dcdfe4; border-radius: 8px; padding: 6px; }
        QPushButton { padding: 8px 14px; }
        QProgressBar { border: 1px solid #dcdfe4; border-radius: 6px; text-align: center; }
        QProgressBar::chunk { background-color: #4a90d9; }
    """)

    app.setApplicationName(APP_NAME)

    w = MainWindow(settings, run_logger=run_logger)
    w.resize(520, 360)
    w.show()

    sys.exit(app.exec())
