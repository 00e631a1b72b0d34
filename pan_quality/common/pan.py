"""Indian PAN structural and anti-pattern validation."""

from __future__ import annotations

import re

from pan_quality.common.constants import (
    REASON_ADJACENT_REPEAT,
    REASON_FORMAT_MISMATCH,
    REASON_SEQUENTIAL_DIGITS,
    REASON_SEQUENTIAL_LETTERS,
    STATUS_INVALID,
    STATUS_VALID,
)
from pan_quality.common.patterns import has_adjacent_repeat, is_strict_ascending_sequence

PAN_FORMAT_RE = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")

LETTER_BLOCK = slice(0, 5)
DIGIT_BLOCK = slice(5, 9)


def matches_pan_format(value: str) -> bool:
    return PAN_FORMAT_RE.fullmatch(value) is not None


def explain_pan(value: str) -> list[str]:
    """Return the failed rule codes for ``value`` in rule order.

    An empty list means the value is a valid PAN. The letter and digit block
    rules only apply once the structural format holds.
    """
    reasons: list[str] = []
    format_ok = matches_pan_format(value)
    if not format_ok:
        reasons.append(REASON_FORMAT_MISMATCH)
    if has_adjacent_repeat(value):
        reasons.append(REASON_ADJACENT_REPEAT)
    if format_ok:
        if is_strict_ascending_sequence(value[LETTER_BLOCK]):
            reasons.append(REASON_SEQUENTIAL_LETTERS)
        if is_strict_ascending_sequence(value[DIGIT_BLOCK]):
            reasons.append(REASON_SEQUENTIAL_DIGITS)
    return reasons


def classify_pan(value: str) -> str:
    return STATUS_INVALID if explain_pan(value) else STATUS_VALID


def is_valid_pan(value: str) -> bool:
    return classify_pan(value) == STATUS_VALID
