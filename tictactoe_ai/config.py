import argparse
from dataclasses import dataclass
from typing import Optional

from .evaluator import Cell
from .game_logic import GameMode

# -----------------------------------------------------------------------------
# TIMING
# -----------------------------------------------------------------------------

COMPUTER_DELAY_MS = 350     # pause before the computer replies

# -----------------------------------------------------------------------------
# BOARD COLORS
# -----------------------------------------------------------------------------

BOARD_BG_COLOR = "#333"
GRID_COLOR = "#555"
X_COLOR = "#8acaff"
O_COLOR = "#ff8a8a"
WIN_CELL_COLOR = "#3d5c3d"
DISABLED_OVERLAY = (0, 0, 0, 70)  # rgba

MODE_LABELS = {
    GameMode.LOCAL: "Two players",
    GameMode.VS_COMPUTER: "Vs computer",
}


@dataclass
class GameConfig:
    """
    runtime settings for the window
    """
    mode: GameMode = GameMode.LOCAL
    computer: Cell = Cell.O
    computer_delay_ms: int = COMPUTER_DELAY_MS
    show_popup: bool = True
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def parse_args(argv=None):
    """
    build a GameConfig from command line flags
    """
    parser = argparse.ArgumentParser(description="Tic-tac-toe with a perfect-play computer opponent")
    parser.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.LOCAL.value,
                        help="starting mode: local two-player or vs computer")
    parser.add_argument("--computer", choices=["X", "O"], default="O",
                        help="marker played by the computer")
    parser.add_argument("--delay", type=int, default=COMPUTER_DELAY_MS,
                        help="milliseconds before the computer replies")
    parser.add_argument("--no-popup", action="store_true",
                        help="don't show a dialog when a round ends")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="also log to this file")
    args = parser.parse_args(argv)

    if args.delay < 0:
        parser.error("--delay must be >= 0")

    return GameConfig(
        mode=GameMode(args.mode),
        computer=Cell(args.computer),
        computer_delay_ms=args.delay,
        show_popup=not args.no_popup,
        log_level=args.log_level,
        log_file=args.log_file,
    )
