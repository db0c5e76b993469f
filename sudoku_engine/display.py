"""Text rendering of solver state: a framed 9x9 view, either simple (digit or '.') or verbose (digit or the candidate list)."""

# display.py
from __future__ import annotations

from types_sudoku import Board

from . import domain
from .grid_state import BOX, SIZE, GridState


def _cell_text(mask: int, simple: bool) -> str:
    if domain.is_resolved(mask):
        return str(domain.value_of(mask))
    if simple:
        return "."
    return "@" + ",".join(str(d) for d in domain.digits(mask)) + "@"


def box_segments(state: GridState, simple: bool) -> list[str]:
    """One string per (row, box column): the three cells of a row inside one box."""
    segments = []
    for r in range(SIZE):
        for c0 in range(0, SIZE, BOX):
            segments.append(" ".join(_cell_text(state.cells[r][c], simple) for c in range(c0, c0 + BOX)))
    return segments


def _rule(width: int, left: str, fill: str, cross: str, right: str) -> str:
    return left + cross.join([fill * width] * BOX) + right


def render_state(state: GridState, simple: bool = False) -> str:
    segments = box_segments(state, simple)
    width = max(len(s) for s in segments)

    lines = [_rule(width, "╔", "═", "╤", "╗")]
    for r in range(SIZE):
        row = segments[r * BOX:(r + 1) * BOX]
        lines.append("║" + "│".join(s.ljust(width) for s in row) + "║")
        if (r + 1) % BOX == 0 and r + 1 != SIZE:
            lines.append(_rule(width, "╟", "─", "┼", "╢"))
    lines.append(_rule(width, "╚", "═", "╧", "╝"))
    return "\n".join(lines)


def render_board(board: Board) -> str:
    return render_state(GridState.from_board(board), simple=True)


def print_state(state: GridState, simple: bool = False) -> None:
    print(render_state(state, simple))
