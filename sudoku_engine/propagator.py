"""Constraint propagation: peer elimination over every unresolved cell, followed by box-level hidden singles on the boxes the elimination pass touched."""

# propagator.py
# One round = eliminate() then hidden_singles().
# - elimination visits cells row-major and writes back immediately, so a cell
#   resolved early in the pass is seen by the cells visited after it
# - hidden singles are looked for in boxes only (never rows/columns)
# - digits are always scanned in ascending order
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from types_sudoku import Move

from . import domain
from .errors import Contradiction
from .grid_state import PEERS, SIZE, GridState, cell_key, which_box

log = logging.getLogger(__name__)


def make_placement(technique: str, r: int, c: int, d: int, why: str) -> Move:
    key = cell_key(r, c)
    return {
        "technique": technique,
        "type": "placement",
        "cell": key,
        "digit": d,
        "explanation": {
            "why": why,
            "units": {"row": f"r{r + 1}", "col": f"c{c + 1}", "box": f"b{which_box(r, c) + 1}"},
        },
        "highlights": {"cells": [key]},
    }


@dataclass
class RoundReport:
    before: int
    after: int
    eliminated: int = 0
    hidden: int = 0
    moves: list[Move] = field(default_factory=list)

    @property
    def resolved(self) -> int:
        return self.before - self.after

    @property
    def stalled(self) -> bool:
        return self.after == self.before


def eliminate(state: GridState, moves: list[Move] | None = None) -> int:
    """Strip from every unresolved cell the values of its resolved peers.
    Returns the number of cells this pass resolved; raises Contradiction on an empty domain."""
    resolved = 0
    for r in range(SIZE):
        for c in range(SIZE):
            mask = state.cells[r][c]
            if domain.is_resolved(mask):
                continue
            used = 0
            for pr, pc in PEERS[(r, c)]:
                other = state.cells[pr][pc]
                if domain.is_resolved(other):
                    used |= other
            mask = domain.without(mask, used)
            state.cells[r][c] = mask
            if mask == 0:
                raise Contradiction(
                    f"No candidate left for {cell_key(r, c)}", cell=(r + 1, c + 1)
                )
            if domain.is_resolved(mask):
                state.remaining -= 1
                resolved += 1
                d = domain.value_of(mask)
                log.debug("naked single %s = %d", cell_key(r, c), d)
                if moves is not None:
                    moves.append(
                        make_placement(
                            "naked_single", r, c, d,
                            f"Every other digit is already placed among the peers of {cell_key(r, c)}.",
                        )
                    )
            else:
                state.box_for(r, c).needs_update = True
    return resolved


def hidden_singles(state: GridState, moves: list[Move] | None = None) -> int:
    """For each flagged box, place any digit that only one unresolved cell of the box can hold."""
    filled = 0
    for box in state.boxes:
        if not box.needs_update:
            continue
        cells = box.cells()
        for d in domain.DIGITS:
            holders = [(r, c) for (r, c) in cells if domain.contains(state.cells[r][c], d)]
            if len(holders) != 1:
                continue
            r, c = holders[0]
            if domain.is_resolved(state.cells[r][c]):
                continue
            state.resolve(r, c, d)
            filled += 1
            log.debug("hidden single %s = %d (box %d)", cell_key(r, c), d, box.index + 1)
            if moves is not None:
                moves.append(
                    make_placement(
                        "hidden_single", r, c, d,
                        f"Digit {d} appears in only one cell in box {box.index + 1}.",
                    )
                )
        box.needs_update = False
    return filled


def run_round(state: GridState, record_moves: bool = True) -> RoundReport:
    report = RoundReport(before=state.remaining, after=state.remaining)
    moves = report.moves if record_moves else None
    report.eliminated = eliminate(state, moves)
    report.hidden = hidden_singles(state, moves)
    report.after = state.remaining
    return report
