class Match3Error(Exception):
    """Base class for board engine failures."""


class BoardShapeError(Match3Error, ValueError):
    """Raised when a board is constructed with bad dimensions or ragged rows."""


class InitialMatchError(Match3Error, ValueError):
    """Raised when a slot could not get a piece that avoids an initial run."""

    def __init__(self, attempts: int, position=None):
        super().__init__(
            f"No piece avoiding a run for slot {position} after {attempts} draw(s)"
        )
        self.attempts = attempts
        self.position = position


class ExhaustedSupply(Match3Error, RuntimeError):
    """Raised when the piece generator cannot produce another piece."""
