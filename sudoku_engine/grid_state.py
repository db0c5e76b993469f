"""Grid state for the solver: 9x9 cell domains, the cached count of unresolved cells, and the 9 box descriptors that carry the deferred hidden-single flag."""

# grid_state.py
# Index math (rows, cols, boxes, peers) plus the mutable state the propagator works on.
# Positions are 0-based (row, col); cell keys in moves and payloads are 1-based "r1c1".
from __future__ import annotations

from dataclasses import dataclass, field

from . import domain
from .errors import InvalidBoard

Board = list[list[str]]
Pos = tuple[int, int]

SIZE = 9
BOX = 3
NUM_CELLS = SIZE * SIZE
BLANK = "."
GIVENS = "123456789"
VALID_CELLS = frozenset(GIVENS) | {BLANK}


def cell_key(r: int, c: int) -> str:
    return f"r{r + 1}c{c + 1}"


def key_to_pos(key: str) -> Pos:
    r = int(key.split("c")[0][1:])
    c = int(key.split("c")[1])
    return (r - 1, c - 1)


def which_box(r: int, c: int) -> int:
    return (r // BOX) * BOX + c // BOX


def row_cells(r: int) -> list[Pos]:
    return [(r, c) for c in range(SIZE)]


def col_cells(c: int) -> list[Pos]:
    return [(r, c) for r in range(SIZE)]


def box_cells(b: int) -> list[Pos]:
    r0 = (b // BOX) * BOX
    c0 = (b % BOX) * BOX
    return [(r0 + i, c0 + j) for i in range(BOX) for j in range(BOX)]


def _peers(r: int, c: int) -> tuple[Pos, ...]:
    ps = set(row_cells(r)) | set(col_cells(c)) | set(box_cells(which_box(r, c)))
    ps.discard((r, c))
    return tuple(sorted(ps))


# Immutable lookup table, shared safely between grids.
PEERS: dict[Pos, tuple[Pos, ...]] = {(r, c): _peers(r, c) for r in range(SIZE) for c in range(SIZE)}


@dataclass
class Box:
    """One 3x3 sub-grid. `needs_update` is set by the elimination pass and cleared by the hidden-single pass."""

    index: int
    row0: int
    col0: int
    needs_update: bool = False

    @classmethod
    def for_index(cls, b: int) -> Box:
        return cls(index=b, row0=(b // BOX) * BOX, col0=(b % BOX) * BOX)

    def cells(self) -> list[Pos]:
        return box_cells(self.index)


def make_boxes() -> list[Box]:
    return [Box.for_index(b) for b in range(SIZE)]


def validate_board(board: Board) -> None:
    if not board:
        raise InvalidBoard("The board is empty: no valid input was parsed.")
    if len(board) != SIZE:
        raise InvalidBoard(f"Expected {SIZE} rows, got {len(board)}")
    for i, row in enumerate(board, 1):
        if len(row) != SIZE:
            raise InvalidBoard(f"Expected {SIZE} columns in row {i}, got {len(row)}")
        for j, ch in enumerate(row, 1):
            if not isinstance(ch, str) or ch not in VALID_CELLS:
                raise InvalidBoard(f"Unexpected character {ch!r} at r{i}c{j}")


@dataclass
class GridState:
    cells: list[list[int]]
    remaining: int
    boxes: list[Box] = field(default_factory=make_boxes, compare=False, repr=False)

    @classmethod
    def from_board(cls, board: Board) -> GridState:
        """Build the initial domains: givens become singletons, blanks get all nine digits.
        Clue uniqueness is not checked here."""
        validate_board(board)
        cells = []
        remaining = 0
        for row in board:
            out = []
            for ch in row:
                if ch == BLANK:
                    out.append(domain.full())
                    remaining += 1
                else:
                    out.append(domain.single(int(ch)))
            cells.append(out)
        return cls(cells=cells, remaining=remaining)

    def copy(self) -> GridState:
        return GridState(cells=[row[:] for row in self.cells], remaining=self.remaining)

    def domain(self, r: int, c: int) -> int:
        return self.cells[r][c]

    def box_for(self, r: int, c: int) -> Box:
        return self.boxes[which_box(r, c)]

    def resolve(self, r: int, c: int, d: int) -> None:
        """Collapse cell (r, c) to digit d, keeping `remaining` in step."""
        was_resolved = domain.is_resolved(self.cells[r][c])
        self.cells[r][c] = domain.single(d)
        if not was_resolved:
            self.remaining -= 1

    def is_solved(self) -> bool:
        return all(domain.is_resolved(m) for row in self.cells for m in row)

    def count_unresolved(self) -> int:
        """Full scan; only used to cross-check the cached `remaining`."""
        return sum(1 for row in self.cells for m in row if not domain.is_resolved(m))

    def percent(self) -> float:
        return self.remaining / NUM_CELLS * 100.0

    def value_at(self, r: int, c: int) -> str:
        m = self.cells[r][c]
        return str(domain.value_of(m)) if domain.is_resolved(m) else BLANK

    def to_board(self) -> Board:
        return [[self.value_at(r, c) for c in range(SIZE)] for r in range(SIZE)]

    def candidates(self) -> dict[str, list[int]]:
        """Candidate lists for every unresolved cell, keyed like 'r1c2'."""
        cand = {}
        for r in range(SIZE):
            for c in range(SIZE):
                m = self.cells[r][c]
                if not domain.is_resolved(m):
                    cand[cell_key(r, c)] = domain.digits(m)
        return cand

    def pair_cells(self) -> list[Pos]:
        return [(r, c) for r in range(SIZE) for c in range(SIZE) if domain.is_pair(self.cells[r][c])]

    def conflicts(self) -> list[dict]:
        """Units in which a resolved digit appears more than once."""
        issues = []

        def duplicates_in_unit(unit: str, cells: list[Pos]):
            seen = {}
            for r, c in cells:
                m = self.cells[r][c]
                if domain.is_resolved(m):
                    seen.setdefault(domain.value_of(m), []).append(cell_key(r, c))
            dups = sorted(d for d, keys in seen.items() if len(keys) > 1)
            if dups:
                bad = [k for d in dups for k in seen[d]]
                issues.append({"type": "duplicate", "unit": unit, "digits": dups, "cells": bad})

        for i in range(SIZE):
            duplicates_in_unit(f"r{i + 1}", row_cells(i))
        for i in range(SIZE):
            duplicates_in_unit(f"c{i + 1}", col_cells(i))
        for i in range(SIZE):
            duplicates_in_unit(f"b{i + 1}", box_cells(i))
        return issues
