"""
hilal.adjust.store
------------------
The sparse, user-editable set of month-start overrides (offset -> day-count)
and its canonical JSON snapshot.

The store performs no validation of values: legality is decided by the
cascade engine before anything is written here.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..core.errors import InvariantError, SnapshotDecodeError

logger = logging.getLogger(__name__)

_INT_KEY_RE = re.compile(r"-?[0-9]+")

Snapshot = Union[str, Mapping[Any, Any]]


class AdjustmentStore:
    """
    Overrides keyed by offset. Every mutation bumps `revision`, which is how
    derived views notice that their cache is stale.
    """
    def __init__(self, data: Optional[Mapping[int, int]] = None):
        self._data: Dict[int, int] = dict(data) if data else {}
        self.revision = 0

    def get(self, offset: int) -> Optional[int]:
        return self._data.get(offset)

    def set(self, offset: int, value: int) -> None:
        self._data[offset] = value
        self.revision += 1

    def remove(self, offset: int) -> None:
        if self._data.pop(offset, None) is not None:
            self.revision += 1

    def __contains__(self, offset: object) -> bool:
        return offset in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdjustmentStore):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"AdjustmentStore({dict(self.entries())!r})"

    def as_dict(self) -> Dict[int, int]:
        return dict(self._data)

    def check_order(self) -> None:
        """Values must strictly increase with offsets."""
        ordered = sorted(self._data.items())
        for (o1, v1), (o2, v2) in zip(ordered, ordered[1:]):
            if v2 <= v1:
                raise InvariantError(
                    f"Adjustment values are not increasing with offsets ({o1}: {v1}, {o2}: {v2})"
                )

    def entries(self) -> List[Tuple[int, int]]:
        """(offset, value) pairs sorted by value (equivalently by offset)."""
        self.check_order()
        return sorted(self._data.items(), key=lambda kv: kv[1])

    # ---------------------------------------------------------
    # Snapshot
    # ---------------------------------------------------------

    def serialize(self) -> str:
        """Compact JSON object {"offset": day_count, ...} in value order."""
        return json.dumps({str(k): v for k, v in self.entries()}, separators=(",", ":"))

    @classmethod
    def deserialize(cls, snapshot: Snapshot) -> "AdjustmentStore":
        """
        Accepts the JSON text produced by serialize() or an already decoded
        mapping. An empty JSON list is read as an empty snapshot.
        """
        if isinstance(snapshot, str):
            pairs = _decode_text(snapshot)
        elif isinstance(snapshot, Mapping):
            pairs = list(snapshot.items())
        else:
            raise SnapshotDecodeError(f"Unsupported snapshot type: {type(snapshot).__name__}")

        data: Dict[int, int] = {}
        for key, value in pairs:
            off = _decode_key(key)
            if off in data:
                raise SnapshotDecodeError(f"Duplicate offset {off} in snapshot")
            if isinstance(value, bool) or not isinstance(value, int):
                raise SnapshotDecodeError(f"Offset {off}: day-count must be an integer, got {value!r}")
            data[off] = value

        ordered = sorted(data.items())
        for (o1, v1), (o2, v2) in zip(ordered, ordered[1:]):
            if v2 <= v1:
                raise SnapshotDecodeError(
                    f"Snapshot values are not increasing with offsets ({o1}: {v1}, {o2}: {v2})"
                )
        logger.debug("Decoded adjustment snapshot with %d entries", len(data))
        return cls(data)


def _keep_pairs(pairs: List[Tuple[str, Any]]) -> List[Tuple[str, Any]]:
    return pairs


def _decode_text(text: str) -> List[Tuple[Any, Any]]:
    if not text.strip():
        return []
    try:
        decoded = json.loads(text, object_pairs_hook=_keep_pairs)
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e}") from e
    if decoded == []:
        return []
    if not isinstance(decoded, list) or not all(isinstance(p, tuple) for p in decoded):
        raise SnapshotDecodeError("Snapshot must be a JSON object")
    return decoded


def _decode_key(key: Any) -> int:
    if isinstance(key, bool):
        raise SnapshotDecodeError(f"Invalid offset {key!r}")
    if isinstance(key, int):
        return key
    if isinstance(key, str) and _INT_KEY_RE.fullmatch(key):
        return int(key)
    raise SnapshotDecodeError(f"Invalid offset {key!r}")
