import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor
from tictactoe_ai.config import parse_args
from tictactoe_ai.log import setup_logging
from tictactoe_ai.ui.main_window import TicTacToeWindow

# -----------------------------------------------------------------------------
# DARK THEME
# -----------------------------------------------------------------------------

ACTIVE_ROLES = {
    QPalette.Window: QColor(53, 53, 53),
    QPalette.WindowText: Qt.white,
    QPalette.Base: QColor(35, 35, 35),
    QPalette.AlternateBase: QColor(53, 53, 53),
    QPalette.ToolTipBase: Qt.white,
    QPalette.ToolTipText: Qt.black,
    QPalette.Text: Qt.white,
    QPalette.Button: QColor(66, 66, 66),
    QPalette.ButtonText: Qt.white,
    QPalette.BrightText: Qt.red,
    QPalette.Highlight: QColor(42, 130, 218),
    QPalette.HighlightedText: Qt.white,
}

DISABLED_GREY = QColor(127, 127, 127)
DISABLED_ROLES = (QPalette.Text, QPalette.ButtonText, QPalette.WindowText)


def apply_default_palette(app: QApplication):
    """
    Dark palette; disabled text greyed so the locked board reads as locked.
    """
    palette = QPalette()
    for role, color in ACTIVE_ROLES.items():
        palette.setColor(role, color)
    for role in DISABLED_ROLES:
        palette.setColor(QPalette.Disabled, role, DISABLED_GREY)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main(argv=None):
    config = parse_args(argv)
    setup_logging(config.log_level, config.log_file)

    app = QApplication(sys.argv[:1])
    app.setStyle('Fusion')

    # Apply default dark theme
    apply_default_palette(app)

    window = TicTacToeWindow(config)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
