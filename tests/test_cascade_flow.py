import pytest

from match3.components.effect import Match, MatchEffect, RefillEffect
from match3.components.grid import EMPTY
from match3.errors import ExhaustedSupply
from match3.events.bus import EVENT_CASCADE_STEP, EVENT_MATCH_CLEARED
from match3.systems.board_ops import find_all_matches
from tests.helpers import board_from


def cascade_board(refill):
    # Swapping (1,2)-(2,2) completes the bottom row. After it falls away the
    # first refilled A lines up with the two A's that dropped into column 0.
    return board_from(
        "ABC",
        "ADX",
        "XXY",
        refill=refill,
    )


def test_two_step_cascade():
    board = cascade_board(["A", "E", "F", "G", "H", "G"])
    effects = []
    board.subscribe(effects.append)

    result = board.move((1, 2), (2, 2))

    assert result.accepted
    assert result.passes == 2
    assert effects == [
        MatchEffect(Match(piece="X", positions=((2, 0), (2, 1), (2, 2)))),
        RefillEffect(positions=((0, 0), (0, 1), (0, 2))),
        MatchEffect(Match(piece="A", positions=((0, 0), (1, 0), (2, 0)))),
        RefillEffect(positions=((0, 0), (1, 0), (2, 0))),
    ]
    assert list(result.effects) == effects
    assert board.rows == [
        ["G", "E", "F"],
        ["H", "B", "C"],
        ["G", "D", "Y"],
    ]
    assert board.is_stable()


def test_cascade_steps_report_depth():
    board = cascade_board(["A", "E", "F", "G", "H", "G"])
    steps = []
    board.event_bus.subscribe(EVENT_CASCADE_STEP, lambda s, **k: steps.append(k.get('depth')))
    board.move((1, 2), (2, 2))
    assert steps == [1, 2]


def test_intersecting_runs_are_cleared_once():
    board = board_from(
        "XBCD",
        "XEFG",
        "HXXI",
        "XJKL",
        refill=["M", "N", "O", "P", "Q"],
    )
    effects = []
    cleared = []
    board.subscribe(effects.append)
    board.event_bus.subscribe(EVENT_MATCH_CLEARED, lambda s, **k: cleared.append(k['positions']))

    result = board.move((2, 0), (3, 0))

    assert result.accepted
    matches = [effect.match for effect in effects if isinstance(effect, MatchEffect)]
    refills = [effect for effect in effects if isinstance(effect, RefillEffect)]
    assert matches == [
        Match(piece="X", positions=((2, 0), (2, 1), (2, 2))),
        Match(piece="X", positions=((0, 0), (1, 0), (2, 0))),
    ]
    assert cleared == [[(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]]
    assert len(refills) == 1
    assert refills[0].positions == ((0, 0), (0, 1), (0, 2), (1, 0), (2, 0))
    assert board.rows == [
        ["M", "N", "O", "D"],
        ["P", "B", "C", "G"],
        ["Q", "E", "F", "I"],
        ["H", "J", "K", "L"],
    ]


def test_exhausted_supply_leaves_gravity_applied_partial_refill():
    board = cascade_board(["A", "E"])
    effects = []
    board.subscribe(effects.append)

    with pytest.raises(ExhaustedSupply):
        board.move((1, 2), (2, 2))

    assert board.rows == [
        ["A", "E", EMPTY],
        ["A", "B", "C"],
        ["A", "D", "Y"],
    ]
    # The match of the failed pass was reported; its refill was not.
    assert effects == [MatchEffect(Match(piece="X", positions=((2, 0), (2, 1), (2, 2))))]


def test_exhausted_supply_is_a_runtime_error():
    board = cascade_board([])
    with pytest.raises(RuntimeError) as excinfo:
        board.move((1, 2), (2, 2))
    assert isinstance(excinfo.value.__cause__, StopIteration)


def test_random_moves_always_end_stable(random_board):
    board = random_board
    for _ in range(25):
        moves = board.valid_moves()
        if not moves:
            break
        result = board.move(*moves[0])
        assert result.accepted
        assert result.passes >= 1
        assert find_all_matches(board.grid) == []
        assert board.grid.empty_positions() == []
