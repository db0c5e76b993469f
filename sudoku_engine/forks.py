"""Fork manager: when propagation stalls, enumerate speculative single-cell assignments (one per candidate of every 2-candidate cell) and hand them out one at a time."""

# forks.py
# This is not a backtracking search. At the default depth of 1 a fork that
# stalls again is simply replaced by the next fork of the same set; forks are
# never forked themselves. `max_depth` > 1 lets a stalled fork open a nested
# set, bounded by the configured depth.
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from types_sudoku import Move

from . import domain
from .grid_state import GridState, Pos, cell_key

log = logging.getLogger(__name__)

Choice = tuple[Pos, int]


def fork_choices(state: GridState) -> list[Choice]:
    """(cell, digit) pairs in row-major cell order, ascending digit within a cell."""
    return [(pos, d) for pos in state.pair_cells() for d in domain.digits(state.domain(*pos))]


def build_forks(state: GridState) -> list[GridState]:
    """One full copy of `state` per choice, with that cell collapsed."""
    forks = []
    for (r, c), d in fork_choices(state):
        fork = state.copy()
        fork.resolve(r, c, d)
        forks.append(fork)
    return forks


@dataclass
class ForkFrame:
    forks: list[GridState]
    choices: list[Choice]
    base_moves: list[Move] = field(default_factory=list)
    next_index: int = 0

    @property
    def exhausted(self) -> bool:
        return self.next_index >= len(self.forks)

    def take(self) -> tuple[GridState, Choice]:
        i = self.next_index
        self.next_index += 1
        return self.forks[i].copy(), self.choices[i]


class ForkManager:
    """Holds the fork sets of one solve session."""

    def __init__(self, max_depth: int = 1):
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.max_depth = max_depth
        self.frames: list[ForkFrame] = []
        self.forks_tried = 0

    @property
    def active(self) -> bool:
        return bool(self.frames)

    @property
    def depth(self) -> int:
        return len(self.frames)

    def can_open(self) -> bool:
        return self.depth < self.max_depth

    def open(self, state: GridState, base_moves: list[Move] | None = None) -> bool:
        """Build a fork set from `state` and push it. False when no cell has exactly 2 candidates."""
        choices = fork_choices(state)
        if not choices:
            log.debug("no 2-candidate cell to fork on at depth %d", self.depth)
            return False
        forks = build_forks(state)
        self.frames.append(ForkFrame(forks=forks, choices=choices, base_moves=list(base_moves or [])))
        log.debug("opened fork set of %d at depth %d", len(forks), self.depth)
        return True

    def next_fork(self) -> tuple[GridState, Move, list[Move]] | None:
        """Next untried fork, falling back to enclosing sets when the innermost is exhausted.
        Returns (grid, fork move, moves made before the fork) or None when every set is spent."""
        while self.frames:
            frame = self.frames[-1]
            if frame.exhausted:
                self.frames.pop()
                continue
            grid, ((r, c), d) = frame.take()
            self.forks_tried += 1
            move: Move = {
                "technique": "fork",
                "type": "placement",
                "cell": cell_key(r, c),
                "digit": d,
                "fork_index": frame.next_index,
                "explanation": {
                    "why": f"Guess {d} for {cell_key(r, c)}, one of its two remaining candidates."
                },
                "highlights": {"cells": [cell_key(r, c)]},
            }
            log.debug("adopting fork %d/%d: %s = %d", frame.next_index, len(frame.forks), cell_key(r, c), d)
            return grid, move, list(frame.base_moves)
        return None
