class GameError(Exception):
    """
    base for engine errors
    """


class InvalidMove(GameError):
    """
    cell taken, index out of range, or round already over
    """
    def __init__(self, index, reason):
        super().__init__(f"invalid move {index!r}: {reason}")
        self.index = index
        self.reason = reason


class InvalidModeForComputerTurn(GameError, AssertionError):
    """
    computer turn asked for outside vs-computer mode or out of turn
    """
