from match3.board import MatchBoard, MoveResult, create_board
from match3.components.effect import Effect, Match, MatchEffect, RefillEffect
from match3.components.grid import EMPTY, Grid
from match3.components.position import Position
from match3.errors import BoardShapeError, ExhaustedSupply, InitialMatchError, Match3Error

__all__ = [
    "BoardShapeError",
    "EMPTY",
    "Effect",
    "ExhaustedSupply",
    "Grid",
    "InitialMatchError",
    "Match",
    "Match3Error",
    "MatchBoard",
    "MatchEffect",
    "MoveResult",
    "Position",
    "RefillEffect",
    "create_board",
]
