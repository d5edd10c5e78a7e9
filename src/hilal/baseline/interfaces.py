"""
hilal.baseline.interfaces
-------------------------
The contract every baseline table fulfils for the adjustment layer.

Offsets are integer month coordinates, strictly increasing with chronological
order and bijective with (month, year). Values are day-counts (modified
Julian days) of the first day of each month.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, Tuple


class BaselineTableProtocol(Protocol):
    """
    Immutable offset -> day-count table. Every pair of adjacent defined
    offsets is already 29 or 30 days apart.
    """
    @property
    def first_offset(self) -> int:
        ...

    @property
    def last_offset(self) -> int:
        ...

    def __contains__(self, offset: object) -> bool:
        ...

    def __len__(self) -> int:
        ...

    def value_at(self, offset: int) -> Optional[int]:
        """Day-count of the month start at offset, or None outside the table."""
        ...

    def offsets(self) -> Iterator[int]:
        ...

    # ---------------------------------------------------------
    # Coordinate transforms (true inverses over the table domain)
    # ---------------------------------------------------------
    def month2off(self, month: int, year: int) -> int:
        ...

    def off2month(self, offset: int) -> Tuple[int, int]:
        """Returns (month, year)."""
        ...

    def require(self, month: int, year: int) -> int:
        """month2off, raising DomainRangeError outside the table."""
        ...
