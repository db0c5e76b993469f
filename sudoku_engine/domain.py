"""Cell domains as 9-bit masks: bit d-1 is set when digit d is still possible for the cell."""

# domain.py
# A domain is a plain int in [0, 0x1FF].
#   size 1  -> resolved
#   size 0  -> contradiction (never valid while solving)

Domain = int

DIGITS = range(1, 10)
FULL: Domain = 0x1FF


def full() -> Domain:
    return FULL


def single(d: int) -> Domain:
    if d not in DIGITS:
        raise ValueError(f"digit out of range: {d!r}")
    return 1 << (d - 1)


def size(mask: Domain) -> int:
    return bin(mask).count("1")


def is_resolved(mask: Domain) -> bool:
    return mask != 0 and mask & (mask - 1) == 0


def is_pair(mask: Domain) -> bool:
    return size(mask) == 2


def contains(mask: Domain, d: int) -> bool:
    return bool(mask & (1 << (d - 1)))


def digits(mask: Domain) -> list[int]:
    """Candidates of `mask` in ascending order."""
    return [d for d in DIGITS if mask & (1 << (d - 1))]


def value_of(mask: Domain) -> int:
    """Digit held by a resolved mask."""
    if not is_resolved(mask):
        raise ValueError(f"domain is not resolved: {digits(mask)}")
    return mask.bit_length()


def without(mask: Domain, other: Domain) -> Domain:
    return mask & ~other & FULL


def from_digits(values) -> Domain:
    mask = 0
    for d in values:
        mask |= single(d)
    return mask
