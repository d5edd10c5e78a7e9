"""
hilal.baseline.factory
----------------------
Transforms pure data specifications into live baseline tables.
"""

from __future__ import annotations

from .arithmetic import build_tabular_table
from .specs import BaselineSpec
from .table import BaselineTable


def make_baseline(spec: BaselineSpec) -> BaselineTable:
    """The universal entry point."""
    if spec.kind == "tabular":
        if spec.params is None:
            raise TypeError(f"Tabular spec '{spec.name}' has no params")
        return build_tabular_table(spec.params, spec.start_year, spec.end_year, name=spec.name)
    if spec.kind == "file":
        if spec.path is None:
            raise TypeError(f"File spec '{spec.name}' has no path")
        return BaselineTable.from_json(spec.path)
    raise TypeError(f"Unknown baseline spec kind: {spec.kind!r}")
