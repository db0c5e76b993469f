from sudoku_engine.display import render_board, render_state
from sudoku_engine.grid_state import GridState
from sudoku_engine.propagator import run_round


def test_simple_view_of_solution(solution):
    lines = render_board(solution).splitlines()
    assert len(lines) == 13
    assert lines[0] == "╔═════╤═════╤═════╗"
    assert lines[1] == "║5 3 4│6 7 8│9 1 2║"
    assert lines[4] == "╟─────┼─────┼─────╢"
    assert lines[-1] == "╚═════╧═════╧═════╝"


def test_simple_and_verbose_views_of_unresolved_cells(rect_board):
    state = GridState.from_board(rect_board)
    run_round(state)
    simple = render_state(state, simple=True).splitlines()
    assert simple[5] == "║8 5 9│7 6 .│4 2 .║"

    verbose = render_state(state, simple=False).splitlines()
    assert verbose[0] == "╔" + "═" * 9 + "╤" + "═" * 9 + "╤" + "═" * 9 + "╗"
    assert verbose[5] == "║8 5 9    │7 6 @1,3@│4 2 @1,3@║"
