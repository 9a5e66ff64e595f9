from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Set, Tuple

from esper import World

from match3.components.effect import Match
from match3.components.grid import EMPTY, Grid
from match3.components.piece_supply import PieceSupply
from match3.components.position import Position, as_position
from match3.constants import DOWN, LEFT, MIN_RUN_LENGTH, RIGHT, UP
from match3.errors import InitialMatchError


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    piece: Any


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise RuntimeError("Grid component not found")


def get_supply(world: World) -> PieceSupply:
    for _, supply in world.get_component(PieceSupply):
        return supply
    raise RuntimeError("PieceSupply component not found")


def _line_runs(grid: Grid, line: Sequence[Position]) -> List[Match]:
    """Split one row or column into maximal runs and keep those long enough to match."""
    matches: List[Match] = []
    run: List[Position] = []
    last_piece: Any = EMPTY
    for pos in line:
        value = grid.piece(pos)
        if value is not EMPTY and last_piece is not EMPTY and value == last_piece:
            run.append(pos)
            continue
        if len(run) >= MIN_RUN_LENGTH:
            matches.append(Match(piece=last_piece, positions=tuple(run)))
        # An empty slot breaks the line and starts nothing.
        run = [pos] if value is not EMPTY else []
        last_piece = value
    if len(run) >= MIN_RUN_LENGTH:
        matches.append(Match(piece=last_piece, positions=tuple(run)))
    return matches


def horizontal_runs(grid: Grid, row: int) -> List[Match]:
    return _line_runs(grid, grid.row_positions(row))


def vertical_runs(grid: Grid, col: int) -> List[Match]:
    return _line_runs(grid, grid.column_positions(col))


def find_all_matches(grid: Grid) -> List[Match]:
    """Detect every horizontal then vertical run of length >= 3, in scan order.

    Runs are reported per axis and never merged, so a slot at an L or T
    intersection shows up in both its row match and its column match.
    """
    matches: List[Match] = []
    for row in range(grid.height):
        matches.extend(horizontal_runs(grid, row))
    for col in range(grid.width):
        matches.extend(vertical_runs(grid, col))
    return matches


def is_stable(grid: Grid) -> bool:
    return not grid.empty_positions() and not find_all_matches(grid)


def consecutive_matches(grid: Grid, position: Position, direction: Position) -> int:
    """Count equal pieces next to position walking in one direction, position excluded.

    Given the row [1, 1, 1], consecutive_matches(grid, (0, 2), LEFT) is 2.
    """
    origin = as_position(position)
    step = as_position(direction)
    value = grid.piece(origin)
    if value is EMPTY:
        return 0
    count = 0
    current = origin.offset(step)
    while not grid.is_outside(current):
        neighbour = grid.piece(current)
        if neighbour is EMPTY or neighbour != value:
            break
        count += 1
        current = current.offset(step)
    return count


def has_line_match(grid: Grid, pos: Position) -> bool:
    """Return True if pos sits on a horizontal or vertical run of length >= 3."""
    horizontal = 1 + consecutive_matches(grid, pos, LEFT) + consecutive_matches(grid, pos, RIGHT)
    if horizontal >= MIN_RUN_LENGTH:
        return True
    vertical = 1 + consecutive_matches(grid, pos, UP) + consecutive_matches(grid, pos, DOWN)
    return vertical >= MIN_RUN_LENGTH


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def predict_swap_creates_match(grid: Grid, src: Position, dst: Position) -> bool:
    """Return True if swapping src/dst is legal and would create a match.

    The swap is applied to the grid only for the duration of the check.
    """
    src = as_position(src)
    dst = as_position(dst)
    if grid.is_outside(src) or grid.is_outside(dst):
        return False
    if not is_adjacent(src, dst):
        return False
    grid.swap(src, dst)
    try:
        return has_line_match(grid, src) or has_line_match(grid, dst)
    finally:
        grid.swap(src, dst)


def find_valid_swaps(grid: Grid) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would produce a match."""
    swaps: List[Tuple[Position, Position]] = []
    for pos in grid.positions():
        for neighbour in (pos.offset(RIGHT), pos.offset(DOWN)):
            if grid.is_outside(neighbour):
                continue
            if predict_swap_creates_match(grid, pos, neighbour):
                swaps.append((pos, neighbour))
    return swaps


def clear_positions(grid: Grid, positions: Iterable[Position]) -> List[Position]:
    """Empty every listed slot once; returns the slots actually cleared, row-major."""
    cleared: Set[Position] = set()
    for pos in positions:
        pos = as_position(pos)
        if pos in cleared or grid.is_empty(pos):
            continue
        grid.set_piece(pos, EMPTY)
        cleared.add(pos)
    return sorted(cleared)


def compute_gravity_moves(grid: Grid) -> List[GravityMove]:
    """Plan how remaining pieces fall so each column is packed against the bottom."""
    moves: List[GravityMove] = []
    for col in range(grid.width):
        target_row = grid.height - 1
        for row in range(grid.height - 1, -1, -1):
            value = grid.cells[row][col]
            if value is EMPTY:
                continue
            if row != target_row:
                moves.append(GravityMove(source=Position(row, col), target=Position(target_row, col), piece=value))
            target_row -= 1
    return moves


def apply_gravity_moves(grid: Grid, moves: List[GravityMove]) -> None:
    # Moves within a column are ordered bottom-up, so every target is already vacated.
    for move in moves:
        grid.set_piece(move.target, move.piece)
        grid.set_piece(move.source, EMPTY)


def refill_empty_slots(grid: Grid, supply: PieceSupply) -> List[Position]:
    """Fill empty slots row-major from the supply and return them in fill order."""
    spawned: List[Position] = []
    for pos in grid.positions():
        if grid.cells[pos.row][pos.col] is not EMPTY:
            continue
        grid.set_piece(pos, supply.draw())
        spawned.append(pos)
    return spawned


def _completes_run(grid: Grid, pos: Position, value: Any) -> bool:
    row, col = pos
    if col >= 2:
        left1 = grid.cells[row][col - 1]
        left2 = grid.cells[row][col - 2]
        if left1 == left2 and left1 == value:
            return True
    if row >= 2:
        up1 = grid.cells[row - 1][col]
        up2 = grid.cells[row - 2][col]
        if up1 == up2 and up1 == value:
            return True
    return False


def fill_board(grid: Grid, supply: PieceSupply, *, max_attempts: int) -> None:
    """Fill every slot row-major without ever completing a run.

    A drawn piece that would equal both slots to its left or both slots above it
    is discarded and redrawn, at most max_attempts draws per slot.
    """
    for pos in grid.positions():
        for _ in range(max_attempts):
            value = supply.draw()
            if not _completes_run(grid, pos, value):
                grid.set_piece(pos, value)
                break
        else:
            raise InitialMatchError(max_attempts, pos)
