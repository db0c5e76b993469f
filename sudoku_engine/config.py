"""Solver configuration: YAML file merged over built-in defaults, then keyword overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULTS: Dict[str, Any] = {
    "max_fork_depth": 1,
    "simple_output": False,
    "log_level": "INFO",
    "record_moves": True,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return DotDict(data)


def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg


def validate(cfg: Dict[str, Any]) -> None:
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    depth = cfg["max_fork_depth"]
    if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
        raise ValueError(f"max_fork_depth must be an integer >= 1, got {depth!r}")
    if str(cfg["log_level"]).upper() not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {cfg['log_level']!r}")
    for key in ("simple_output", "record_moves"):
        if not isinstance(cfg[key], bool):
            raise ValueError(f"{key} must be true or false, got {cfg[key]!r}")


def load_config(path: str | Path | None = None, **overrides) -> DotDict:
    """Defaults <- YAML file (if given) <- non-None overrides."""
    cfg = DotDict(DEFAULTS)
    if path is not None:
        cfg.update(load_yaml(path))
    merge_overrides(cfg, **overrides)
    validate(cfg)
    return cfg
