"""
Boarding order computation.

Two strategies exist, selected per batch by tag:

- ``priority_table``: when every seat label in the batch belongs to a
  configured priority table, each booking scores the best (lowest) rank
  among its own seats and bookings board by ascending score.
- ``heuristic``: back-to-front by the deepest row a booking holds, then
  bookings with more window seats first.

Both strategies break remaining ties by ascending booking id. Sorting is
stable, so bookings sharing an id keep their file order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .exceptions import NoValidBookingsError
from .models import BoardingEntry
from .parser import BookingLine, parse_bookings
from .seats import normalize_label, resolve_seat

# Sorts in front of every real row.
NO_SEAT_ROW = -1


class SequencingStrategy(str, Enum):
    PRIORITY_TABLE = "priority_table"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class PriorityTable:
    """
    A fixed seat-to-rank lookup used for a closed set of seats.

    Attributes:
        name: Configuration key the table was loaded from
        ranks: Normalized seat label -> rank; lower ranks board first
    """

    name: str
    ranks: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranks", MappingProxyType(dict(self.ranks)))

    @property
    def labels(self) -> FrozenSet[str]:
        return frozenset(self.ranks)

    def covers(self, seat_universe: FrozenSet[str]) -> bool:
        return bool(seat_universe) and seat_universe <= self.labels

    def best_rank(self, booking: BookingLine) -> int:
        ranks = [self.ranks[label] for label in map(normalize_label, booking.seat_labels) if label in self.ranks]
        return min(ranks)


DEFAULT_PRIORITY_TABLES: Tuple[PriorityTable, ...] = (
    PriorityTable(name="four_seat_demo", ranks={"A2": 1, "B2": 2, "A1": 3, "B1": 4}),
)


@dataclass(frozen=True)
class StrategySelection:
    strategy: SequencingStrategy
    table: Optional[PriorityTable] = None


@dataclass(frozen=True)
class ScoredBooking:
    """
    A booking together with the values the heuristic orders it by.

    Attributes:
        booking: The parsed booking, unchanged
        max_row: Deepest resolvable row, or NO_SEAT_ROW when no label resolves
        window_count: Resolved seats in a window column
        aisle_count: Resolved seats in an aisle column; not used for ordering
    """

    booking: BookingLine
    max_row: int
    window_count: int
    aisle_count: int

    @property
    def booking_id(self) -> int:
        return self.booking.booking_id

    def sort_key(self) -> Tuple[int, int, int]:
        return (-self.max_row, -self.window_count, self.booking_id)


def seat_universe(bookings: Sequence[BookingLine]) -> FrozenSet[str]:
    return frozenset(normalize_label(label) for booking in bookings for label in booking.seat_labels)


def select_strategy(bookings: Sequence[BookingLine], tables: Sequence[PriorityTable] = DEFAULT_PRIORITY_TABLES) -> StrategySelection:
    """
    Choose how a batch is ordered.

    The first table whose labels contain the batch's whole seat universe wins
    and takes precedence over the heuristic, even for a single booking.
    """
    universe = seat_universe(bookings)
    for table in tables:
        if table.covers(universe):
            return StrategySelection(strategy=SequencingStrategy.PRIORITY_TABLE, table=table)
    return StrategySelection(strategy=SequencingStrategy.HEURISTIC)


def score_booking(booking: BookingLine) -> ScoredBooking:
    seats = [seat for seat in map(resolve_seat, booking.seat_labels) if seat is not None]
    return ScoredBooking(
        booking=booking,
        max_row=max((seat.row for seat in seats), default=NO_SEAT_ROW),
        window_count=sum(1 for seat in seats if seat.is_window),
        aisle_count=sum(1 for seat in seats if seat.is_aisle),
    )


def _to_entries(ordered: Sequence[BookingLine]) -> List[BoardingEntry]:
    return [BoardingEntry(seq=index, booking_id=booking.booking_id) for index, booking in enumerate(ordered, start=1)]


def _order_by_priority_table(bookings: Sequence[BookingLine], selection: StrategySelection) -> List[BookingLine]:
    return sorted(bookings, key=lambda booking: (selection.table.best_rank(booking), booking.booking_id))


def _order_by_heuristic(bookings: Sequence[BookingLine], selection: StrategySelection) -> List[BookingLine]:
    scored = sorted((score_booking(booking) for booking in bookings), key=ScoredBooking.sort_key)
    return [item.booking for item in scored]


_ORDERINGS: Dict[SequencingStrategy, Callable[[Sequence[BookingLine], StrategySelection], List[BookingLine]]] = {
    SequencingStrategy.PRIORITY_TABLE: _order_by_priority_table,
    SequencingStrategy.HEURISTIC: _order_by_heuristic,
}


@dataclass(frozen=True)
class BoardingPlan:
    """
    A computed boarding order together with the strategy that produced it.

    Attributes:
        selection: The strategy (and table, if any) used for ordering
        entries: One entry per booking with ``seq`` running 1..N
    """

    selection: StrategySelection
    entries: Tuple[BoardingEntry, ...]


def plan_boarding_sequence(
    bookings: Sequence[BookingLine],
    tables: Sequence[PriorityTable] = DEFAULT_PRIORITY_TABLES,
) -> BoardingPlan:
    """
    Select a strategy once and order bookings with it.

    Args:
        bookings: Parsed bookings; input order only matters for equal ids
        tables: Priority tables to try before falling back to the heuristic

    Returns:
        BoardingPlan holding the selection and the ordered entries
    """
    selection = select_strategy(bookings, tables)
    ordered = _ORDERINGS[selection.strategy](bookings, selection)
    return BoardingPlan(selection=selection, entries=tuple(_to_entries(ordered)))


def compute_boarding_sequence(
    bookings: Sequence[BookingLine],
    tables: Sequence[PriorityTable] = DEFAULT_PRIORITY_TABLES,
) -> List[BoardingEntry]:
    """
    Order bookings for boarding.

    Returns:
        One entry per booking with ``seq`` running 1..N in boarding order
    """
    return list(plan_boarding_sequence(bookings, tables).entries)


def plan_text(text: str, tables: Sequence[PriorityTable] = DEFAULT_PRIORITY_TABLES) -> BoardingPlan:
    """
    Parse a booking file and plan its boarding order.

    Raises:
        NoValidBookingsError: If no line of the text is a valid booking
    """
    bookings = parse_bookings(text)
    if not bookings:
        raise NoValidBookingsError()
    return plan_boarding_sequence(bookings, tables)


def sequence_text(text: str, tables: Sequence[PriorityTable] = DEFAULT_PRIORITY_TABLES) -> List[BoardingEntry]:
    """
    Parse a booking file and order it.

    Raises:
        NoValidBookingsError: If no line of the text is a valid booking
    """
    return list(plan_text(text, tables).entries)
