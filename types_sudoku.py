# types_sudoku.py
from __future__ import annotations

from typing import Any, TypedDict

Board = list[list[str]]
"""A 9x9 Sudoku board as rows of characters ('.' = unknown, '1'..'9' = digit)."""

Grid = list[list[int]]
"""The same board as rows of integers (0 = unknown), used by JSON payloads."""

Candidates = dict[str, list[int]]
"""Map from cell key (e.g., 'r1c1') to a list of candidate digits (1..9)."""


class Move(TypedDict, total=False):
    """A single resolution made by the solver, in the order it happened."""

    technique: str  # 'naked_single', 'hidden_single' or 'fork'
    type: str  # always 'placement' for this solver
    digit: int  # the digit being placed
    cell: str  # target cell (e.g., 'r4c7')
    fork_index: int  # 1-based position of the fork inside its fork set
    explanation: dict[str, Any]  # {'why': ..., 'units': {...}}
    highlights: dict[str, Any]  # cells to emphasise when rendering


class SolveReport(TypedDict, total=False):
    """Outcome of one solve attempt, as returned by the CLI (--json) and the HTTP API."""

    status: str  # 'solved', 'stuck', 'contradiction' or 'invalid'
    input: Board
    board: Board  # solution, or the best known state on failure
    candidates: Candidates  # unresolved cells of `board`
    remaining: int
    percent: float
    rounds: int
    forks_tried: int
    moves: list[Move]
    error: str
