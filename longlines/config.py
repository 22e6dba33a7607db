from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from importlib import import_module
from typing import Any, Dict, Iterable, Mapping, cast

from pydantic import BaseModel, Field

yaml = cast(Any, import_module("yaml"))

ENV_PREFIX = "LONGLINES__"


class WrapSettings(BaseModel):
    """Global options recognised by the word-wrap mode."""

    force_all_returns_hard: bool = False
    double_space_after_sentence: bool = False
    double_space_after_colon: bool = False
    viewport_width: int = Field(default=80, ge=2)


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError("longlines.yaml must contain a top-level mapping")
    return data


def _env_overrides() -> Dict[str, Any]:
    """
    Map LONGLINES__KEY=value -> settings[key]=value (key lower-cased).
    Values are YAML-coerced (so 'true', '42' etc. become bool/int).
    """
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(ENV_PREFIX):
            continue
        key = k[len(ENV_PREFIX) :].lower()
        try:
            val = yaml.safe_load(v)
        except Exception:
            val = v
        out[key] = val
    return out


def _warn_unknown_settings(opts: Mapping[str, Any]) -> None:
    """Emit a warning when options name keys WrapSettings does not define."""

    unknown = [key for key in opts if key not in WrapSettings.model_fields]
    if unknown:
        warnings.warn(
            f"Unknown longlines settings: {', '.join(sorted(unknown))}",
            stacklevel=2,
        )


def load_settings(
    path: str | os.PathLike | None = "longlines.yaml",
    overrides: Dict[str, Any] | None = None,
) -> WrapSettings:
    """Load YAML + env/CLI overrides into validated WrapSettings."""
    sources: Iterable[Dict[str, Any]] = (
        d for d in (_read_yaml(path), _env_overrides(), overrides) if d
    )
    acc: Dict[str, Any] = {}
    merged = reduce(lambda base, override: {**base, **override}, sources, acc)
    _warn_unknown_settings(merged)
    return WrapSettings.model_validate(merged)
