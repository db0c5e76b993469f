"""Solver: drives the propagate / stall / fork loop over one live grid until it is solved, stuck, or contradictory. Also exposes tool-friendly wrappers returning JSON-ready reports for the CLI and the API."""

# solver.py
# States: Propagating -> {Solved | Stalled}; Stalled -> {Forking -> Propagating | Stuck}.
# step() runs a single round and reports a StepOutcome; solve() decides what
# each outcome means (next round, next fork, or a terminal error).
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Dict, Optional

from types_sudoku import Board, Move, SolveReport

from .config import load_config
from .errors import Contradiction, InvalidBoard, Stuck
from .forks import ForkManager
from .grid_state import GridState
from .propagator import run_round

log = logging.getLogger(__name__)


class StepOutcome(Enum):
    PROGRESS = auto()
    SOLVED = auto()
    STALLED = auto()
    CONTRADICTION = auto()


def completed_grid_conflict(state: GridState) -> Contradiction | None:
    """For a fully resolved grid, the first repeated digit as a Contradiction (None if the grid is valid)."""
    issues = state.conflicts()
    if not issues:
        return None
    first = issues[0]
    return Contradiction(f"Digit(s) {first['digits']} repeated in {first['unit']}")


class Solver:
    """Owns the live grid and the backup taken before the first fork."""

    def __init__(self, board: Board, config: Optional[Dict[str, Any]] = None):
        self.config = load_config(**(config or {}))
        self.board = [list(row) for row in board]
        self.state = GridState.from_board(self.board)
        self.forks = ForkManager(max_depth=self.config.max_fork_depth)
        self.backup: GridState | None = None
        self.backup_moves: list[Move] = []
        self.rounds = 0
        self.moves: list[Move] = []
        self.last_contradiction: Contradiction | None = None

    # --- read-only accessors for renderers ---------------------------------
    def unknown_count(self) -> int:
        return self.state.remaining

    def unknown_percent(self) -> float:
        return self.state.percent()

    @property
    def forks_tried(self) -> int:
        return self.forks.forks_tried

    # --- loop ---------------------------------------------------------------
    def step(self) -> StepOutcome:
        if self.state.is_solved():
            self.last_contradiction = completed_grid_conflict(self.state)
            if self.last_contradiction is not None:
                return StepOutcome.CONTRADICTION
            return StepOutcome.SOLVED
        try:
            report = run_round(self.state, record_moves=self.config.record_moves)
        except Contradiction as ex:
            self.last_contradiction = ex
            return StepOutcome.CONTRADICTION
        self.rounds += 1
        self.moves.extend(report.moves)
        if report.stalled:
            return StepOutcome.STALLED
        return StepOutcome.PROGRESS

    def solve(self) -> Board:
        """Run until solved. Raises Stuck or Contradiction; on Stuck the live grid is the pre-fork backup."""
        log.info("solving: %d unknown (%.1f%%)", self.state.remaining, self.state.percent())
        while True:
            outcome = self.step()
            if outcome is StepOutcome.SOLVED:
                break
            if outcome is StepOutcome.PROGRESS:
                continue
            if outcome is StepOutcome.CONTRADICTION:
                if not self.forks.active:
                    raise self.last_contradiction
                log.warning("fork abandoned: %s", self.last_contradiction)
                self._next_fork()
                continue
            self._on_stall()
        log.info("solved after %d rounds, %d fork(s) tried", self.rounds, self.forks_tried)
        return self.state.to_board()

    def _on_stall(self) -> None:
        if not self.forks.active:
            if not self.forks.open(self.state, self.moves):
                log.warning("stalled with no 2-candidate cell to fork on")
                raise Stuck(0, self.state.remaining, self.state.percent())
            self.backup = self.state.copy()
            self.backup_moves = list(self.moves)
            self._next_fork()
            return
        if self.forks.can_open() and self.forks.open(self.state, self.moves):
            self._next_fork()
            return
        self._next_fork()

    def _next_fork(self) -> None:
        nxt = self.forks.next_fork()
        if nxt is None:
            self.state = self.backup
            self.moves = self.backup_moves
            log.warning("all %d fork(s) failed", self.forks_tried)
            raise Stuck(self.forks_tried, self.state.remaining, self.state.percent())
        grid, move, base_moves = nxt
        self.state = grid
        self.moves = base_moves + [move] if self.config.record_moves else []


def solve_board(board: Board, config: Optional[Dict[str, Any]] = None) -> Board:
    return Solver(board, config).solve()


def propagate(board: Board) -> GridState:
    """Rounds of elimination + hidden singles until the first stall (no forking).
    A completed grid with a repeated digit raises Contradiction, as in Solver.step()."""
    state = GridState.from_board(board)
    while not state.is_solved():
        if run_round(state, record_moves=False).stalled:
            break
    if state.is_solved():
        err = completed_grid_conflict(state)
        if err is not None:
            raise err
    return state


def solve_tool(board: Board, config: Optional[Dict[str, Any]] = None) -> SolveReport:
    """Solve `board` and describe the outcome as a JSON-ready SolveReport instead of raising."""
    try:
        solver = Solver(board, config)
    except InvalidBoard as ex:
        return {"status": "invalid", "input": board, "error": str(ex)}
    payload: SolveReport = {"input": solver.board}
    try:
        solver.solve()
        payload["status"] = "solved"
    except Stuck as ex:
        payload["status"] = "stuck"
        payload["error"] = str(ex)
    except Contradiction as ex:
        payload["status"] = "contradiction"
        payload["error"] = str(ex)
    state = solver.state
    payload.update(
        board=state.to_board(),
        candidates=state.candidates(),
        remaining=state.remaining,
        percent=state.percent(),
        rounds=solver.rounds,
        forks_tried=solver.forks_tried,
        moves=solver.moves,
    )
    return payload
