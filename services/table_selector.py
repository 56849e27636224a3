"""
Best-fit table selection.

Phase 1 looks for the single free table that wastes the fewest seats. Phase 2
pairs two free tables, minimising total capacity first and then the larger of
the two, so big tables stay free for big parties. Never more than two tables.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Optional, Sequence, Tuple

from domain.errors import ReservationConflictError


@dataclass(frozen=True)
class TableCandidate:
    """A free table the selector may assign."""
    id: int
    capacity: int
    label: str = ""

    @classmethod
    def from_table(cls, table) -> "TableCandidate":
        return cls(id=table.id, capacity=table.capacity, label=table.label)


def _ordered(tables: Iterable[TableCandidate]) -> List[TableCandidate]:
    return sorted(tables, key=lambda t: (t.capacity, t.id))


def find_best_single_table(free_tables: Iterable[TableCandidate], guests: int) -> Optional[TableCandidate]:
    """Smallest free table seating at least `guests`; ties go to the lower ID."""
    for table in _ordered(free_tables):
        if table.capacity >= guests:
            return table
    return None


def find_best_table_pair(
    free_tables: Iterable[TableCandidate],
    guests: int,
) -> Optional[Tuple[TableCandidate, TableCandidate]]:
    """
    Best pair of free tables seating at least `guests` together.

    Pairs are ranked by total capacity, then by the larger individual capacity,
    then by table IDs so the choice is deterministic.
    """
    pairs = [
        (a, b)
        for a, b in combinations(_ordered(free_tables), 2)
        if a.capacity + b.capacity >= guests
    ]
    if not pairs:
        return None

    return min(
        pairs,
        key=lambda pair: (
            pair[0].capacity + pair[1].capacity,
            max(pair[0].capacity, pair[1].capacity),
            pair[0].id,
            pair[1].id,
        ),
    )


def select_tables(free_tables: Sequence[TableCandidate], guests: int) -> List[TableCandidate]:
    """
    Choose one or two free tables for a party.

    Raises:
        ReservationConflictError: If no single table or pair can seat the party
    """
    single = find_best_single_table(free_tables, guests)
    if single is not None:
        return [single]

    pair = find_best_table_pair(free_tables, guests)
    if pair is not None:
        return list(pair)

    raise ReservationConflictError(
        f"No tables available for {guests} guest{'s' if guests > 1 else ''} "
        f"on the selected date and time. Please try a different time.",
        code="no_availability",
    )
