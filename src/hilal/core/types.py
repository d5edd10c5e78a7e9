from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

@dataclass(frozen=True)
class HijriDate:
    year: int
    month: int
    day: int

@dataclass(frozen=True)
class ForcedAdjustment:
    """A month start that must move along with a proposed change."""
    offset: int
    month: int
    year: int
    day_count: int
    label: str

@dataclass(frozen=True)
class Candidate:
    """One of the two legal starts of a month, with its downstream cascade."""
    day_count: int
    label: str
    current_set: bool
    also_adjustments: Tuple[ForcedAdjustment, ...] = ()

@dataclass(frozen=True)
class AdjustmentInfo:
    offset: int
    month: int
    year: int
    current: int
    default: int
    current_label: str
    default_label: str
