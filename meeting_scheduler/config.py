"""Solver configuration: defaults plus JSON/YAML loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


ENGINES = ("backtracking", "cp-sat")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class SolverConfig:
    node_consistency: bool = True
    arc_consistency: bool = True
    # None means the search runs until the tree is exhausted
    max_nodes: Optional[int] = None
    # Above this many meetings the explicit-stack search is used
    recursion_limit: int = 500
    engine: str = "backtracking"
    cp_sat_time_limit: float = 10.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name in ("node_consistency", "arc_consistency"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if self.max_nodes is not None and not _is_int(self.max_nodes):
            raise ValueError(f"max_nodes must be an integer, got {self.max_nodes!r}")
        if not _is_int(self.recursion_limit):
            raise ValueError(f"recursion_limit must be an integer, got {self.recursion_limit!r}")
        if isinstance(self.cp_sat_time_limit, bool) or not isinstance(self.cp_sat_time_limit, (int, float)):
            raise ValueError(f"cp_sat_time_limit must be a number, got {self.cp_sat_time_limit!r}")
        if not isinstance(self.engine, str) or self.engine not in ENGINES:
            raise ValueError(f"engine must be one of {ENGINES}, got {self.engine!r}")
        if self.max_nodes is not None and self.max_nodes <= 0:
            raise ValueError(f"max_nodes must be positive, got {self.max_nodes}")
        if self.recursion_limit <= 0:
            raise ValueError(f"recursion_limit must be positive, got {self.recursion_limit}")
        if self.cp_sat_time_limit <= 0:
            raise ValueError(f"cp_sat_time_limit must be positive, got {self.cp_sat_time_limit}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def load_config(path: str | Path | None = None) -> SolverConfig:
    """
    Load solver configuration.

    Args:
        path: JSON file, or YAML file (``.yaml``/``.yml``); None for defaults

    Returns:
        SolverConfig

    Raises:
        ValueError: On unknown keys or invalid values
    """
    if path is None:
        return SolverConfig()
    data = _read_raw(Path(path))
    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return SolverConfig(**data)
