"""
Seat label resolution for the fixed four-column cabin layout.

A seat label is one column letter (A-D) followed by one or two digits, for
example ``A1`` or ``d20``. Columns A and D are window seats, B and C are
aisle seats.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .utils import strip_whitespace

SEAT_PATTERN = re.compile(r"([ABCD])([0-9]{1,2})", re.IGNORECASE)

WINDOW_COLUMNS: FrozenSet[str] = frozenset({"A", "D"})
AISLE_COLUMNS: FrozenSet[str] = frozenset({"B", "C"})


@dataclass(frozen=True)
class Seat:
    row: int
    column: str

    @property
    def is_window(self) -> bool:
        return is_window(self.column)

    @property
    def is_aisle(self) -> bool:
        return is_aisle(self.column)


def normalize_label(label: str) -> str:
    """Canonical form used when comparing labels: no whitespace, upper case."""
    return strip_whitespace(label).upper()


def resolve_seat(label: str) -> Optional[Seat]:
    """
    Resolve a raw seat label into a row/column coordinate.

    Args:
        label: Raw token such as ``"A1"`` or ``"b12"``

    Returns:
        The resolved Seat, or None when the label does not match the
        letter-plus-digits shape. Rows are not range checked.
    """
    match = SEAT_PATTERN.fullmatch(label)
    if not match:
        return None
    return Seat(row=int(match.group(2)), column=match.group(1).upper())


def is_window(column: str) -> bool:
    return column in WINDOW_COLUMNS


def is_aisle(column: str) -> bool:
    return column in AISLE_COLUMNS
