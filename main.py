import sys

from PyQt5.QtWidgets import QApplication

from docmark.ui import MainWindow
from docmark.utils import AppSettings, LoggingConfig, get_log_dir


def main():
    """
    Run the Docmark annotation application.
    An optional file path on the command line is opened at startup.
    """
    settings = AppSettings.load()
    LoggingConfig.setup_logging(get_log_dir(), settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("Docmark")

    file_path = None
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    window = MainWindow(file_path, settings)
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
