from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen

from ..config import (BOARD_BG_COLOR, GRID_COLOR, X_COLOR, O_COLOR,
                      WIN_CELL_COLOR, DISABLED_OVERLAY)
from ..evaluator import Cell

SIZE = 3


class BoardWidget(QWidget):
    """
    custom widget to draw and click on tic-tac-toe board
    """
    cell_clicked = Signal(int)  # emits row-major index on click

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine            # reference to game state
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_accept_clicks(self, accept):
        # enable/disable user input, greyed when off
        self._accept_clicks = accept
        self.update()

    def accepts_clicks(self):
        return self._accept_clicks

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def cell_rect(self, index):
        ox, oy, side = self._geometry()
        cell = side / SIZE
        r, c = divmod(index, SIZE)
        return QRectF(ox + c * cell, oy + r * cell, cell, cell)

    def paintEvent(self, event):
        """
        draw grid, X/O marks, highlight winning line
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            ox, oy, side = self._geometry()
            painter.fillRect(self.rect(), QColor(BOARD_BG_COLOR))
            cell_size = side / SIZE
            # winning cells
            line = self.engine.outcome.line
            if line:
                for i in line:
                    painter.fillRect(self.cell_rect(i), QColor(WIN_CELL_COLOR))
            # grid lines
            painter.setPen(QPen(QColor(GRID_COLOR), 2))
            for i in range(1, SIZE):
                x = ox + i*cell_size
                painter.drawLine(int(x), int(oy), int(x), int(oy+side))
                y = oy + i*cell_size
                painter.drawLine(int(ox), int(y), int(ox+side), int(y))
            # marks
            for i, sym in enumerate(self.engine.board):
                if sym == Cell.EMPTY:
                    continue
                center = self.cell_rect(i).center()
                cx, cy = center.x(), center.y()
                rad = cell_size/2 * 0.7
                if sym == Cell.X:
                    painter.setPen(QPen(QColor(X_COLOR), 4))
                    # two crossing lines
                    painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                    painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                else:
                    painter.setPen(QPen(QColor(O_COLOR), 4))
                    painter.drawEllipse(QPointF(cx, cy), rad, rad)
            # disabled look
            if not self._accept_clicks:
                painter.fillRect(QRectF(ox, oy, side, side), QColor(*DISABLED_OVERLAY))
        finally:
            painter.end()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accept_clicks or self.engine.is_over:
            return
        ox, oy, side = self._geometry()
        x, y = event.position().x(), event.position().y()
        # only inside grid
        if not (ox <= x < ox+side and oy <= y < oy+side):
            return
        cell = side / SIZE
        if cell <= 0:
            return
        col = min(int((x-ox)//cell), SIZE-1)
        row = min(int((y-oy)//cell), SIZE-1)
        self.cell_clicked.emit(row*SIZE + col)  # notify main window
