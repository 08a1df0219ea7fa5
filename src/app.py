import logging
import sys

from PySide6.QtWidgets import QApplication, QDialog

from config import get_settings
from logging_setup import setup_logging
from services.session import create_session
from ui.dialogs import LoginDialog
from ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    log_file = setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)
    logger.info("Starting %s (log file: %s)", settings.app_name, log_file)

    app = QApplication(sys.argv)
    app.setApplicationName(settings.app_name)
    app.setQuitOnLastWindowClosed(False)
    session = create_session(settings)

    windows = []

    def show_login():
        if LoginDialog(session.auth).exec() != QDialog.Accepted:
            logger.info("Login cancelled, exiting")
            app.quit()
            return
        win = MainWindow(session)
        win.resize(settings.window_width, settings.window_height)
        win.logged_out.connect(show_login)
        win.closed.connect(app.quit)
        for old in windows:
            old.deleteLater()
        windows[:] = [win]
        win.show()

    show_login()
    if session.user is None:
        return 0
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
