"""Board parsing and conversion: text in (bracketed list, 81-char string, or 9 lines), 9x9 character board out; plus conversions to the integer grid used in JSON payloads."""

# board.py
# Accepted text forms:
#   '[[".",".","9","7","4","8",".",".","."],[...],...]'   (quotes/commas ignored)
#   '53..7....6..195....98....6.8...6...34..8..6...2...3.6....28....419..5....8..79'
#   nine lines of nine characters
# '0' is read as blank in the string/line forms. Parse errors are logged and
# yield the empty board, which the engine rejects as InvalidBoard.
from __future__ import annotations

import logging

from types_sudoku import Board, Grid

from .grid_state import BLANK, SIZE, VALID_CELLS

log = logging.getLogger(__name__)

_IGNORED_IN_ROW = "[,\"' \t\r\n"


def _parse_bracketed(text: str) -> Board:
    board: Board = []
    row = None
    for ch in text.strip()[1:]:
        if row is None:
            if ch == "[":
                row = []
            continue
        if ch == "]":
            if len(row) != SIZE:
                log.error("Expected %d columns in row %d, got %d", SIZE, len(board) + 1, len(row))
                return []
            board.append(row)
            row = None
        elif ch not in _IGNORED_IN_ROW:
            row.append(ch)
    if row is not None:
        log.error("Unterminated row %d", len(board) + 1)
        return []
    return board


def _parse_flat(text: str) -> Board:
    chars = [ch for ch in text if not ch.isspace() and ch != "|"]
    if len(chars) != SIZE * SIZE:
        lines = [ln for ln in text.splitlines() if ln.strip()]
        if len(lines) > 1:
            log.error("Expected %d rows, got %d", SIZE, len(lines))
        else:
            log.error("Expected %d cells, got %d", SIZE * SIZE, len(chars))
        return []
    chars = [BLANK if ch == "0" else ch for ch in chars]
    return [chars[i * SIZE:(i + 1) * SIZE] for i in range(SIZE)]


def parse_board(text: str) -> Board:
    """Parse `text` into a 9x9 board of '.'/'1'..'9'. Returns [] (and logs why) on bad input."""
    if text is None or not text.strip():
        log.error("Expected a board, got empty input")
        return []
    board = _parse_bracketed(text) if text.lstrip().startswith("[") else _parse_flat(text)
    if not board:
        return []
    if len(board) != SIZE:
        log.error("Expected %d rows, got %d", SIZE, len(board))
        return []
    for r, row in enumerate(board, 1):
        for c, ch in enumerate(row, 1):
            if not isinstance(ch, str) or ch not in VALID_CELLS:
                log.error("Unexpected character %r at r%dc%d", ch, r, c)
                return []
    return board


def board_from_grid(grid: Grid) -> Board:
    return [[BLANK if v == 0 else str(v) for v in row] for row in grid]


def board_to_grid(board: Board) -> Grid:
    return [[0 if ch == BLANK else int(ch) for ch in row] for row in board]


def board_to_string(board: Board) -> str:
    return "".join("".join(row) for row in board)
