"""Error kinds raised by the solving engine: invalid input, contradictions found during propagation, and stalls the fork manager could not escape."""

# errors.py


class SolverError(RuntimeError):
    """Base class for every failure the engine reports to its caller."""


class InvalidBoard(SolverError):
    """The board handed to the engine is empty or malformed."""


class Contradiction(SolverError):
    """A cell lost its last candidate, or a completed grid repeats a digit in a unit."""

    def __init__(self, msg: str, cell: tuple[int, int] | None = None):
        super().__init__(msg)
        self.cell = cell  # (row, col) 1-based, when known


class Stuck(SolverError):
    """Propagation stalled and no fork is left to try."""

    def __init__(self, forks_tried: int, remaining: int, percent: float):
        self.forks_tried = forks_tried
        self.remaining = remaining
        self.percent = percent
        super().__init__(
            f"The last update was ineffective. Forks tried: {forks_tried}. "
            f"Remaining: {remaining} ({percent:.6f}%)"
        )
