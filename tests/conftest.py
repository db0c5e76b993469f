# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudoku_engine", "apps" and "types_sudoku" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SOLUTION = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]

# Two "deadly rectangles" of the solution above: swapping the digits of either
# one gives another valid grid, so propagation alone can never settle them.
RECT_13 = [(3, 5), (3, 8), (4, 5), (4, 8)]  # digits {1, 3}, boxes 5 and 6
RECT_45 = [(6, 3), (6, 8), (7, 3), (7, 8)]  # digits {4, 5}, boxes 8 and 9


def _board(blanks=(), changes=None):
    board = [list(row) for row in SOLUTION]
    for (r, c), ch in (changes or {}).items():
        board[r][c] = ch
    for r, c in blanks:
        board[r][c] = "."
    return board


@pytest.fixture
def solution():
    return [list(row) for row in SOLUTION]


@pytest.fixture
def make_board():
    """make_board(blanks, changes) -> solution board with `blanks` emptied and `changes` applied."""
    return _board


@pytest.fixture
def rect_board():
    return _board(RECT_13)


@pytest.fixture
def two_rect_board():
    return _board(RECT_13 + RECT_45)


@pytest.fixture
def hidden_single_board():
    # (0,1) and (8,0) fall to elimination; (0,0) keeps {3,5} through the pass and
    # is then the only cell of box 1 that can hold 5.
    return _board([(0, 0), (0, 1), (8, 0)])


@pytest.fixture
def empty_boxes_board():
    blanks = []
    for b in (0, 4, 8):
        r0, c0 = (b // 3) * 3, (b % 3) * 3
        blanks += [(r0 + i, c0 + j) for i in range(3) for j in range(3)]
    return _board(blanks)


@pytest.fixture
def sparse_board():
    # Only four 1s: one box hidden single, then nothing but 8-candidate cells.
    board = [["."] * 9 for _ in range(9)]
    for r, c in [(1, 3), (2, 6), (3, 1), (6, 2)]:
        board[r][c] = "1"
    return board


def assert_valid_solution(board):
    units = []
    units += [[(r, c) for c in range(9)] for r in range(9)]
    units += [[(r, c) for r in range(9)] for c in range(9)]
    units += [[(3 * (b // 3) + i, 3 * (b % 3) + j) for i in range(3) for j in range(3)] for b in range(9)]
    for unit in units:
        assert sorted(board[r][c] for r, c in unit) == list("123456789")


@pytest.fixture
def check_solution():
    return assert_valid_solution
