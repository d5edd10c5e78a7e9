"""
hilal.adjust.view
-----------------
The calendar as seen by callers: baseline values with overrides applied.
Holds no state of its own beyond a cache keyed on the store revision.
"""

from __future__ import annotations

import bisect
import logging
from typing import Dict, List, Optional, Tuple

from ..baseline.interfaces import BaselineTableProtocol
from ..baseline.table import is_valid_length
from .store import AdjustmentStore

logger = logging.getLogger(__name__)


def merge(baseline: BaselineTableProtocol, overrides: Dict[int, int]) -> Dict[int, int]:
    """Baseline table with `overrides` replacing the values at their offsets."""
    out = {off: baseline.value_at(off) for off in baseline.offsets()}
    for off, v in overrides.items():
        if off in out:
            out[off] = v
    return out


class EffectiveView:
    def __init__(self, baseline: BaselineTableProtocol, store: AdjustmentStore):
        self.baseline = baseline
        self.store = store
        self._revision: Optional[int] = None
        self._offsets: List[int] = []
        self._values: List[int] = []

    def _refresh(self) -> None:
        if self._revision == self.store.revision:
            return
        merged = merge(self.baseline, self.store.as_dict())
        self._offsets = list(merged)
        self._values = [merged[o] for o in self._offsets]
        self._revision = self.store.revision
        logger.debug("Rebuilt effective view at store revision %d", self._revision)

    def invalidate(self) -> None:
        self._revision = None

    def value_at(self, offset: int) -> Optional[int]:
        if offset not in self.baseline:
            return None
        v = self.store.get(offset)
        return v if v is not None else self.baseline.value_at(offset)

    def month_length(self, offset: int) -> Optional[int]:
        """Days between the start of `offset` and the start of the next month."""
        a = self.value_at(offset)
        b = self.value_at(offset + 1)
        if a is None or b is None:
            return None
        return b - a

    def items(self) -> List[Tuple[int, int]]:
        self._refresh()
        return list(zip(self._offsets, self._values))

    def values(self) -> List[int]:
        self._refresh()
        return list(self._values)

    def locate(self, day_count: int) -> Optional[int]:
        """Offset of the month containing day_count (None before the table or on/after its last start)."""
        self._refresh()
        i = bisect.bisect_right(self._values, day_count) - 1
        if i < 0 or i >= len(self._values) - 1:
            return None
        return self._offsets[i]

    def violations(self) -> List[Tuple[int, int]]:
        """(offset, length) for every month whose length breaks the 29/30 law."""
        self._refresh()
        out = []
        for i in range(1, len(self._values)):
            length = self._values[i] - self._values[i - 1]
            if not is_valid_length(length):
                out.append((self._offsets[i - 1], length))
        return out
