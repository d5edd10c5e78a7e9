"""
hilal.adjust.cascade
--------------------
Decides which further overrides must be added or dropped when one month start
is changed, so that every month stays 29 or 30 days long.

All simulate_* methods are pure functions of (baseline, store, proposal);
only the commit_* methods write to the store.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..baseline.interfaces import BaselineTableProtocol
from ..baseline.table import MAX_MONTH_LENGTH, MIN_MONTH_LENGTH, is_valid_length
from ..core.errors import DomainRangeError
from ..core.types import AdjustmentInfo, Candidate, ForcedAdjustment
from ..format import gregorian_label
from .store import AdjustmentStore
from .view import EffectiveView

logger = logging.getLogger(__name__)

Labeler = Callable[[int], str]


class _Trial:
    """Baseline with a private copy of the overrides, for what-if walks."""
    def __init__(self, baseline: BaselineTableProtocol, overrides: Dict[int, int]):
        self.baseline = baseline
        self.overrides = overrides

    def __getitem__(self, offset: int) -> int:
        v = self.overrides.get(offset)
        return v if v is not None else self.baseline.value_at(offset)


class CascadeEngine:
    def __init__(
        self,
        baseline: BaselineTableProtocol,
        store: AdjustmentStore,
        view: Optional[EffectiveView] = None,
        *,
        labeler: Labeler = gregorian_label,
    ):
        self.baseline = baseline
        self.store = store
        self.view = view if view is not None else EffectiveView(baseline, store)
        self.labeler = labeler

    def _require(self, offset: int) -> None:
        if offset not in self.baseline:
            raise DomainRangeError(
                f"Offset {offset} outside baseline ({self.baseline.first_offset}..{self.baseline.last_offset})"
            )

    # ---------------------------------------------------------
    # Simulation
    # ---------------------------------------------------------

    def simulate_removal(self, offset: int) -> List[int]:
        """
        Offsets whose overrides must also go if the override at `offset` is
        removed. Each walk stops at the first override that stays valid.
        """
        self._require(offset)
        adj = self.store.as_dict()
        adj.pop(offset, None)
        trial = _Trial(self.baseline, adj)
        out: List[int] = []

        noff = offset + 1
        while noff in adj:
            length = trial[noff] - trial[noff - 1]
            logger.debug("removal walk forward: offset %d length %d", noff, length)
            if is_valid_length(length):
                break
            out.append(noff)
            del adj[noff]
            noff += 1

        noff = offset - 1
        while noff in adj:
            length = trial[noff + 1] - trial[noff]
            logger.debug("removal walk backward: offset %d length %d", noff, length)
            if is_valid_length(length):
                break
            out.append(noff)
            del adj[noff]
            noff -= 1

        return out

    def simulate_insertion(self, offset: int, value: int) -> Dict[int, int]:
        """
        Forced month starts after `offset` if it starts on `value`. Each too
        short or too long month is clamped to 29 or 30 days until a month
        is valid on its own. Earlier months are never touched.
        """
        self._require(offset)
        adj = self.store.as_dict()
        adj[offset] = value
        trial = _Trial(self.baseline, adj)
        forced: Dict[int, int] = {}

        noff = offset + 1
        while noff in self.baseline:
            prev = trial[noff - 1]
            length = trial[noff] - prev
            if length < MIN_MONTH_LENGTH:
                forced[noff] = prev + MIN_MONTH_LENGTH
            elif length > MAX_MONTH_LENGTH:
                forced[noff] = prev + MAX_MONTH_LENGTH
            else:
                break
            logger.debug("insertion walk: offset %d length %d -> %d", noff, length, forced[noff])
            adj[noff] = forced[noff]
            noff += 1

        return forced

    # ---------------------------------------------------------
    # Commit
    # ---------------------------------------------------------

    def commit_insertion(self, month: int, year: int, value: int) -> bool:
        """
        Start (month, year) on `value`. Returns False without touching the
        store if the month before it would not be 29 or 30 days long.
        """
        offset = self.baseline.require(month, year)
        prev = self.view.value_at(offset - 1)
        if prev is None:
            raise DomainRangeError(f"Month {month}/{year} has no previous month in the baseline")
        length = value - prev
        if not (MIN_MONTH_LENGTH - 1 < length < MAX_MONTH_LENGTH + 1):
            logger.warning("Rejected start %d for %d/%d: previous month would be %d days", value, month, year, length)
            return False

        changes = {offset: value}
        changes.update(self.simulate_insertion(offset, value))
        for k, v in sorted(changes.items()):
            if self.baseline.value_at(k) == v:
                self.store.remove(k)
            else:
                self.store.set(k, v)
        self.store.check_order()
        self.view.invalidate()
        logger.info("Set %d/%d to start on %d (%d forced changes)", month, year, value, len(changes) - 1)
        return True

    def commit_deletion(self, month: int, year: int) -> List[int]:
        """Drop the override of (month, year) and every override it invalidates. Returns the latter."""
        offset = self.baseline.require(month, year)
        cascade = self.simulate_removal(offset)
        self.store.remove(offset)
        for k in cascade:
            self.store.remove(k)
        self.view.invalidate()
        logger.info("Removed adjustment of %d/%d (%d cascaded removals)", month, year, len(cascade))
        return cascade

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def enumerate_candidates(self, month: int, year: int) -> List[Candidate]:
        """
        The two legal starts of (month, year) given the current start of the
        previous month. Empty when the month or its predecessor is outside
        the table.
        """
        offset = self.baseline.month2off(month, year)
        if offset not in self.baseline or offset - 1 not in self.baseline:
            return []
        base = self.view.value_at(offset - 1)
        current = self.view.value_at(offset)

        out = []
        for v in (base + MIN_MONTH_LENGTH, base + MAX_MONTH_LENGTH):
            also = []
            for k, fv in sorted(self.simulate_insertion(offset, v).items()):
                hm, hy = self.baseline.off2month(k)
                also.append(ForcedAdjustment(offset=k, month=hm, year=hy, day_count=fv, label=self.labeler(fv)))
            out.append(Candidate(
                day_count=v,
                label=self.labeler(v),
                current_set=(v == current),
                also_adjustments=tuple(also),
            ))
        return out

    def removal_preview(self, month: int, year: int) -> List[Tuple[int, int]]:
        """(month, year) of every override commit_deletion would also drop."""
        return [self.baseline.off2month(k) for k in self.simulate_removal(self.baseline.require(month, year))]

    def current_adjustments(self) -> List[AdjustmentInfo]:
        out = []
        for k, v in self.store.entries():
            hm, hy = self.baseline.off2month(k)
            default = self.baseline.value_at(k)
            out.append(AdjustmentInfo(
                offset=k,
                month=hm,
                year=hy,
                current=v,
                default=default,
                current_label=self.labeler(v),
                default_label=self.labeler(default),
            ))
        return out
