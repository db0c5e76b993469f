import pytest

from sudoku_engine import domain
from sudoku_engine.forks import ForkFrame, ForkManager, build_forks, fork_choices
from sudoku_engine.grid_state import GridState
from sudoku_engine.propagator import run_round


@pytest.fixture
def stalled_rect(rect_board):
    state = GridState.from_board(rect_board)
    assert run_round(state).stalled
    return state


def test_choices_follow_row_major_then_ascending_digit(stalled_rect):
    assert fork_choices(stalled_rect) == [
        ((3, 5), 1), ((3, 5), 3),
        ((3, 8), 1), ((3, 8), 3),
        ((4, 5), 1), ((4, 5), 3),
        ((4, 8), 1), ((4, 8), 3),
    ]


def test_each_fork_collapses_exactly_one_cell(stalled_rect):
    forks = build_forks(stalled_rect)
    assert len(forks) == 8
    for fork, ((r, c), d) in zip(forks, fork_choices(stalled_rect)):
        assert fork.remaining == stalled_rect.remaining - 1
        assert fork.domain(r, c) == domain.single(d)
        diff = [
            (i, j) for i in range(9) for j in range(9)
            if fork.domain(i, j) != stalled_rect.domain(i, j)
        ]
        assert diff == [(r, c)]
    # base grid untouched
    assert stalled_rect.remaining == 4


def test_no_pair_cells_no_forks(sparse_board):
    state = GridState.from_board(sparse_board)
    run_round(state)
    assert build_forks(state) == []
    manager = ForkManager()
    assert manager.open(state) is False
    assert not manager.active


def test_manager_hands_out_independent_copies(stalled_rect):
    manager = ForkManager(max_depth=1)
    assert manager.open(stalled_rect, [{"technique": "naked_single"}])
    seen = []
    while True:
        nxt = manager.next_fork()
        if nxt is None:
            break
        grid, move, base_moves = nxt
        assert move["technique"] == "fork"
        assert base_moves == [{"technique": "naked_single"}]
        grid.cells[0][0] = 0
        seen.append((move["cell"], move["digit"], move["fork_index"]))
    assert len(seen) == 8
    assert seen[0] == ("r4c6", 1, 1)
    assert seen[-1] == ("r5c9", 3, 8)
    assert manager.forks_tried == 8
    assert not manager.active
    assert stalled_rect.cells[0][0] == domain.single(5)


def test_depth_bound(stalled_rect):
    manager = ForkManager(max_depth=1)
    manager.open(stalled_rect)
    assert manager.depth == 1
    assert not manager.can_open()
    assert ForkManager(max_depth=2).can_open()
    with pytest.raises(ValueError):
        ForkManager(max_depth=0)


def test_exhausted_inner_set_falls_back_to_outer(stalled_rect):
    manager = ForkManager(max_depth=2)
    manager.open(stalled_rect)
    manager.next_fork()
    inner, _, _ = manager.next_fork()  # second outer fork
    run_round(inner)
    # r4c6 = 3 settles the whole rectangle, so the inner set would be empty
    assert manager.open(inner) is False
    manager.frames.append(ForkFrame(forks=[inner], choices=[((0, 0), 5)]))
    assert manager.depth == 2
    manager.next_fork()
    grid, move, _ = manager.next_fork()  # inner exhausted -> third outer fork
    assert manager.depth == 1
    assert move["cell"] == "r4c9" and move["digit"] == 1
    assert manager.forks_tried == 4
