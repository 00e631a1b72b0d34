"""Character pattern detectors used by PAN classification."""

from __future__ import annotations


def has_adjacent_repeat(value: str) -> bool:
    return any(left == right for left, right in zip(value, value[1:]))


def is_strict_ascending_sequence(value: str) -> bool:
    # Zero or one character has no pair to break the run.
    for left, right in zip(value, value[1:]):
        if ord(left) + 1 != ord(right):
            return False
    return True
