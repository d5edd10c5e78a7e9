"""
hilal.baseline.table
--------------------
The concrete, immutable baseline table. Loaded once per session and never
mutated; adjustments live in hilal.adjust.store.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from ..core.errors import DomainRangeError, InvariantError

logger = logging.getLogger(__name__)

MIN_MONTH_LENGTH = 29
MAX_MONTH_LENGTH = 30


def is_valid_length(length: int) -> bool:
    return MIN_MONTH_LENGTH <= length <= MAX_MONTH_LENGTH


@dataclass(frozen=True)
class BaselineTable:
    """
    Month starts for a contiguous offset range.

    Offset convention: offset = 12 * (year - epoch_year) + (month - 1), so
    offset 0 is month 1 of epoch_year. The table covers
    first_offset .. first_offset + len(starts) - 1.
    """
    epoch_year: int
    first_offset: int
    starts: Tuple[int, ...]
    name: str = "custom"

    def __post_init__(self) -> None:
        if not self.starts:
            raise ValueError("A baseline table needs at least one month start")
        object.__setattr__(self, "starts", tuple(int(v) for v in self.starts))
        for i in range(1, len(self.starts)):
            length = self.starts[i] - self.starts[i - 1]
            if not is_valid_length(length):
                off = self.first_offset + i
                raise InvariantError(
                    f"Baseline '{self.name}': month at offset {off - 1} has length {length}"
                )

    # ---------------------------------------------------------
    # Table access
    # ---------------------------------------------------------

    @property
    def last_offset(self) -> int:
        return self.first_offset + len(self.starts) - 1

    def __len__(self) -> int:
        return len(self.starts)

    def __contains__(self, offset: object) -> bool:
        return isinstance(offset, int) and self.first_offset <= offset <= self.last_offset

    def value_at(self, offset: int) -> Optional[int]:
        if offset not in self:
            return None
        return self.starts[offset - self.first_offset]

    def __getitem__(self, offset: int) -> int:
        v = self.value_at(offset)
        if v is None:
            raise DomainRangeError(
                f"Offset {offset} outside baseline '{self.name}' "
                f"({self.first_offset}..{self.last_offset})"
            )
        return v

    def offsets(self) -> Iterator[int]:
        return iter(range(self.first_offset, self.last_offset + 1))

    def as_dict(self) -> Dict[int, int]:
        return dict(zip(self.offsets(), self.starts))

    # ---------------------------------------------------------
    # Coordinate transforms
    # ---------------------------------------------------------

    def month2off(self, month: int, year: int) -> int:
        if not (1 <= month <= 12):
            raise ValueError("month must be in 1..12")
        return 12 * (year - self.epoch_year) + (month - 1)

    def off2month(self, offset: int) -> Tuple[int, int]:
        return (offset % 12) + 1, self.epoch_year + offset // 12

    def require(self, month: int, year: int) -> int:
        """month2off that insists the month lies inside the table."""
        off = self.month2off(month, year)
        if off not in self:
            raise DomainRangeError(f"Month {month}/{year} is outside baseline '{self.name}'")
        return off

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    @classmethod
    def from_mapping(cls, epoch_year: int, data: Mapping[int, int], *, name: str = "custom") -> "BaselineTable":
        """Build from an offset -> day-count mapping with contiguous offsets."""
        if not data:
            raise ValueError("A baseline table needs at least one month start")
        keys = sorted(data)
        if keys[-1] - keys[0] + 1 != len(keys):
            raise ValueError("Baseline offsets must be contiguous")
        return cls(epoch_year=epoch_year, first_offset=keys[0], starts=tuple(data[k] for k in keys), name=name)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, name: Optional[str] = None) -> "BaselineTable":
        """
        Expected keys:
        'epoch_year': int
        'starts': list[int]
        'first_offset': int (default 0), or 'first_year'/'first_month'
        'name': str (optional)
        """
        try:
            epoch_year = int(payload["epoch_year"])
            starts: Sequence[int] = payload["starts"]
        except KeyError as e:
            raise ValueError(f"Baseline payload is missing {e.args[0]!r}") from e
        if "first_offset" in payload:
            first_offset = int(payload["first_offset"])
        else:
            fy = int(payload.get("first_year", epoch_year))
            fm = int(payload.get("first_month", 1))
            first_offset = 12 * (fy - epoch_year) + fm - 1
        for v in starts:
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"Baseline month starts must be integers, got {v!r}")
        return cls(
            epoch_year=epoch_year,
            first_offset=first_offset,
            starts=tuple(starts),
            name=name or str(payload.get("name", "custom")),
        )

    @classmethod
    def from_json(cls, source: Union[str, Path]) -> "BaselineTable":
        path = Path(source)
        with path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
        table = cls.from_payload(payload, name=payload.get("name", path.stem))
        logger.debug("Loaded baseline '%s' from %s (%d months)", table.name, path, len(table))
        return table

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "epoch_year": self.epoch_year,
            "first_offset": self.first_offset,
            "starts": list(self.starts),
        }
