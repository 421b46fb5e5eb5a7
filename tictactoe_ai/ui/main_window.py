import logging

from ..config import GameConfig, MODE_LABELS
from ..errors import InvalidMove
from ..game_logic import GameEngine, GameMode, Scoreboard
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QComboBox,
    QMessageBox, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, QTimer, Slot

log = logging.getLogger(__name__)


class TicTacToeWindow(QMainWindow):
    """
    main window UI and game flow
    """
    def __init__(self, config=None):
        """
        init state, ui widgets, signals
        """
        super().__init__()
        self.config = config or GameConfig()
        self.scoreboard = Scoreboard()
        self.engine = GameEngine(
            mode=self.config.mode,
            computer=self.config.computer,
            scoreboard=self.scoreboard,
            on_change=self._refresh,
            on_round_end=self._on_round_end,
        )
        self.board_widget = BoardWidget(self.engine, parent=self)
        # single pending computer reply at a time
        self.computer_timer = QTimer(self)
        self.computer_timer.setSingleShot(True)
        self.computer_timer.timeout.connect(self._play_computer_move)

        self._setup_ui()
        self._refresh()
        self._schedule_computer_move()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("QMainWindow { background-color: #222; }")
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_top_controls()        # mode + scores
        self.main_layout.addWidget(self.controls_top_widget)
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self._create_bottom_controls()     # status + buttons
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        new_action = QAction("New Round", self)
        new_action.triggered.connect(self.new_round)
        undo_action = QAction("Undo", self)
        undo_action.triggered.connect(self.undo)
        reset_action = QAction("Reset Scores", self)
        reset_action.triggered.connect(self.reset_scores)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (new_action, undo_action, reset_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_top_controls(self):
        '''mode selector + scoreboard'''
        self.controls_top_widget = QWidget()
        hl = QHBoxLayout(self.controls_top_widget)
        hl.addWidget(QLabel("Mode:"))
        self.mode_combo = QComboBox()
        for mode, label in MODE_LABELS.items():
            self.mode_combo.addItem(label, mode.value)
        self.mode_combo.setCurrentIndex(self.mode_combo.findData(self.engine.mode.value))
        self.mode_combo.currentIndexChanged.connect(self._on_mode_changed)
        hl.addWidget(self.mode_combo)
        hl.addStretch(1)
        self.x_wins_label = QLabel()
        self.o_wins_label = QLabel()
        self.draws_label = QLabel()
        for w in (self.x_wins_label, self.o_wins_label, self.draws_label):
            hl.addWidget(w)

    def _create_bottom_controls(self):
        # status label + round buttons
        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.controls_bottom_widget.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.new_round_button = QPushButton("New round"); self.new_round_button.clicked.connect(self.new_round)
        self.undo_button = QPushButton("Undo"); self.undo_button.clicked.connect(self.undo)
        self.reset_scores_button = QPushButton("Reset scores"); self.reset_scores_button.clicked.connect(self.reset_scores)
        for w in (self.message_label, None, self.new_round_button,
                  self.undo_button, self.reset_scores_button):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)

    @Slot(str)
    def _update_message(self, text, is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_success: style = "color: lime; font-weight: bold;"
        elif is_turn:  style = "color: #8acaff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def _update_scores(self):
        sb = self.scoreboard
        self.x_wins_label.setText(f"X wins: {sb.wins_x}")
        self.o_wins_label.setText(f"O wins: {sb.wins_o}")
        self.draws_label.setText(f"Draws: {sb.draws}")

    def _refresh(self):
        # redraw after any engine change
        waiting = self.computer_timer.isActive() or self.engine.is_computer_turn
        self.board_widget.set_accept_clicks(not self.engine.is_over and not waiting)
        self._update_message(self.engine.status_message(),
                             is_success=self.engine.is_over, is_turn=not self.engine.is_over)
        self._update_scores()

    def _on_round_end(self, outcome):
        # runs inside apply_move; popup deferred until it returns
        log.info("round over: %s", outcome.message)
        if self.config.show_popup:
            QTimer.singleShot(0, lambda: self._show_round_popup(outcome))

    def _show_round_popup(self, outcome):
        if not self.engine.is_over:
            return  # already moved on
        QMessageBox.information(self, "Round over", outcome.message)
        if self.engine.is_over:
            self.new_round()

    @Slot(int)
    def _on_cell_clicked(self, index):
        # no input while the computer is thinking
        if self.computer_timer.isActive() or self.engine.is_computer_turn:
            return
        try:
            self.engine.apply_move(index)
        except InvalidMove as e:
            log.debug("ignored click: %s", e)
            return
        self._schedule_computer_move()

    def _schedule_computer_move(self):
        if not self.engine.is_computer_turn:
            return
        self.board_widget.set_accept_clicks(False)
        self.computer_timer.start(self.config.computer_delay_ms)

    @Slot()
    def _play_computer_move(self):
        # round may have been reset while waiting
        if not self.engine.is_computer_turn:
            self._refresh()
            return
        self.engine.computer_turn()

    def _cancel_computer_move(self):
        self.computer_timer.stop()

    @Slot()
    def new_round(self):
        self._cancel_computer_move()
        self.engine.start_round()
        self._schedule_computer_move()

    @Slot()
    def undo(self):
        self._cancel_computer_move()
        if self.engine.undo():
            self._schedule_computer_move()
        else:
            self._refresh()

    @Slot()
    def reset_scores(self):
        log.info("scores reset")
        self.scoreboard.reset()
        self.new_round()

    @Slot(int)
    def _on_mode_changed(self, combo_index):
        mode = GameMode(self.mode_combo.itemData(combo_index))
        log.info("mode changed to %s", mode.value)
        self._cancel_computer_move()
        self.engine.change_mode(mode)
        self._schedule_computer_move()

    def closeEvent(self, event):
        # ensure cleanup on close
        self._cancel_computer_move()
        event.accept()
