from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Literal, Optional

from .arithmetic import JDN_EPOCH_ASTRONOMICAL, JDN_EPOCH_CIVIL, TabularParams

# Leap-year positions inside the 30-year cycle
LEAPS_TYPE_I = frozenset({2, 5, 7, 10, 13, 15, 18, 21, 24, 26, 29})
LEAPS_TYPE_II = frozenset({2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29})

# Umm al-Qura almanac range
DEFAULT_START_YEAR = 1318
DEFAULT_END_YEAR = 1500


@dataclass(frozen=True)
class BaselineSpec:
    """Pure data payload for constructing a baseline table."""
    kind: Literal["tabular", "file"]
    name: str
    params: Optional[TabularParams] = None
    path: Optional[str] = None
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR

    @staticmethod
    def like(name: str) -> "BaselineSpec":
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown baseline spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    @staticmethod
    def from_file(path: str) -> "BaselineSpec":
        return BaselineSpec(kind="file", name=path, path=path)

    def tweak(self, **kwargs) -> "BaselineSpec":
        return replace(self, **kwargs)


ALL_SPECS: Dict[str, BaselineSpec] = {
    "tabular": BaselineSpec(
        kind="tabular",
        name="tabular",
        params=TabularParams(epoch_jdn=JDN_EPOCH_CIVIL, leap_years=LEAPS_TYPE_II),
    ),
    "tabular-astronomical": BaselineSpec(
        kind="tabular",
        name="tabular-astronomical",
        params=TabularParams(epoch_jdn=JDN_EPOCH_ASTRONOMICAL, leap_years=LEAPS_TYPE_II),
    ),
    "tabular-i": BaselineSpec(
        kind="tabular",
        name="tabular-i",
        params=TabularParams(epoch_jdn=JDN_EPOCH_CIVIL, leap_years=LEAPS_TYPE_I),
    ),
}
