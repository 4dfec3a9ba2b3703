"""
Booking file parsing.

Turns raw upload text into booking records. Input looks like::

    Booking   Seats
    101       A1,B1
    120       A20, C2

Header lines, blank lines, lines with a non-integer id and lines without
any seat label are dropped silently; they never abort the whole file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .utils import split_lines, strip_whitespace

logger = logging.getLogger(__name__)

HEADER_MARKER = "booking"
BOOKING_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class BookingLine:
    """
    One parsed booking.

    Attributes:
        booking_id: Integer booking identifier from the first column
        seat_labels: Raw seat tokens in file order, whitespace removed
    """

    booking_id: int
    seat_labels: Tuple[str, ...]


def _parse_booking_id(token: str) -> Optional[int]:
    if not BOOKING_ID_PATTERN.fullmatch(token):
        return None
    return int(token)


def parse_line(line: str) -> Optional[BookingLine]:
    """
    Parse a single input line.

    Args:
        line: One line of the uploaded file

    Returns:
        A BookingLine, or None for blank, header and malformed lines
    """
    stripped = line.strip()
    if not stripped:
        return None

    tokens = stripped.split()
    if HEADER_MARKER in tokens[0].lower():
        return None

    booking_id = _parse_booking_id(tokens[0])
    if booking_id is None:
        return None

    seats = strip_whitespace("".join(tokens[1:]))
    seat_labels = tuple(label for label in seats.split(",") if label)
    if not seat_labels:
        return None

    return BookingLine(booking_id=booking_id, seat_labels=seat_labels)


def parse_bookings(text: str) -> List[BookingLine]:
    """
    Parse every line of an uploaded file, keeping the valid bookings in file order.

    Args:
        text: The decoded file content

    Returns:
        All bookings that parsed; may be empty
    """
    bookings: List[BookingLine] = []
    for number, raw in enumerate(split_lines(text), start=1):
        booking = parse_line(raw)
        if booking is None:
            if raw.strip():
                logger.debug(f"Skipping line {number}: {raw.strip()!r}")
            continue
        bookings.append(booking)
    return bookings
