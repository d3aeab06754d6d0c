"""
Main entry point for the input validation demo application.
"""

import sys

from PySide6.QtWidgets import QApplication

from validation_core.config import setup_qsettings
from validation_core.error_handler import init_logging, setup_error_handling
from validation_gui.demo_window import DemoWindow


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)
    setup_qsettings()
    init_logging()
    setup_error_handling()

    window = DemoWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
