from match3.components.position import Position

# Shortest line of equal pieces that counts as a match.
MIN_RUN_LENGTH = 3

# Draws per slot create_board tries before giving up on a run-free piece.
DEFAULT_BUILD_ATTEMPTS = 100

# Unit steps used by the point-local consecutive match walks (row grows downward).
LEFT = Position(0, -1)
RIGHT = Position(0, 1)
UP = Position(-1, 0)
DOWN = Position(1, 0)
