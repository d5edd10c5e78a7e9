"""
hilal.config
------------
Session settings. Loaded once and passed explicitly to HijriCalendar.from_settings.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import load_dotenv

from .baseline.factory import make_baseline
from .baseline.specs import ALL_SPECS, DEFAULT_END_YEAR, DEFAULT_START_YEAR, BaselineSpec
from .baseline.table import BaselineTable
from .core.errors import ConfigError
from .format import DEFAULT_GREGORIAN_FORMAT, LANGCODES

ENV_PREFIX = "HILAL_"


@dataclass(frozen=True)
class Settings:
    baseline: str = "tabular"
    baseline_file: Optional[str] = None
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR
    adj_data: Optional[Union[str, Dict[Any, Any]]] = None
    adj_file: Optional[str] = None
    grdate_format: str = DEFAULT_GREGORIAN_FORMAT
    default_format: str = "_j _M _Y"
    langcode: str = "en"

    def __post_init__(self) -> None:
        if self.baseline_file is None and self.baseline not in ALL_SPECS:
            raise ConfigError(f"Unknown baseline '{self.baseline}'. Available: {sorted(ALL_SPECS)}")
        if self.end_year < self.start_year:
            raise ConfigError("end_year must be >= start_year")
        if self.langcode not in LANGCODES:
            raise ConfigError(f"Unsupported langcode '{self.langcode}'. Available: {list(LANGCODES)}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown settings: {unknown}")
        kwargs = dict(data)
        for key in ("start_year", "end_year"):
            if key in kwargs:
                try:
                    kwargs[key] = int(kwargs[key])
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"{key} must be an integer, got {kwargs[key]!r}") from e
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "Settings":
        with Path(path).open(encoding="utf-8") as fh:
            return cls.from_mapping(json.load(fh))

    @classmethod
    def from_env(cls, env_path: Optional[Union[str, Path]] = None) -> "Settings":
        """Read HILAL_* variables, after loading a .env file if one is found."""
        if env_path:
            load_dotenv(env_path, override=True)
        else:
            load_dotenv()
        data = {}
        for f in fields(cls):
            val = os.getenv(ENV_PREFIX + f.name.upper(), "").strip()
            if val:
                data[f.name] = val
        return cls.from_mapping(data)

    def baseline_spec(self) -> BaselineSpec:
        if self.baseline_file is not None:
            return BaselineSpec.from_file(self.baseline_file)
        return BaselineSpec.like(self.baseline).tweak(start_year=self.start_year, end_year=self.end_year)

    def load_baseline(self) -> BaselineTable:
        return make_baseline(self.baseline_spec())

    def load_adj_data(self) -> Optional[Union[str, Dict[Any, Any]]]:
        """Inline adj_data wins over adj_file; a missing adj_file means no adjustments yet."""
        if self.adj_data is not None:
            return self.adj_data
        if self.adj_file is not None:
            p = Path(self.adj_file)
            if p.exists():
                return p.read_text(encoding="utf-8")
        return None
