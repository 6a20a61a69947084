"""Utility helpers shared by the docular configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import DocularConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty or ``false``."""
    if value is None or value is False:
        return None
    text = str(value).strip()
    return text or None


def _as_bool(value: object | None, *, field: str, default: bool) -> bool:
    """Return ``value`` as a bool, rejecting anything but booleans and None."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"'{field}' must be a boolean, got {value!r}."
            raise DocularConfigError(msg)


def _as_mapping(value: object | None, *, field: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping; ``None`` and ``false`` become empty."""
    if value is None or value is False:
        return {}
    if not isinstance(value, typ.Mapping):
        msg = f"'{field}' must be a mapping, got {type(value).__name__}."
        raise DocularConfigError(msg)
    return value


def _as_list(value: object | None, *, field: str) -> list[typ.Any]:
    """Return ``value`` as a list; a lone string becomes a one-item list."""
    match value:
        case None:
            return []
        case str():
            return [value]
        case list() | tuple():
            return list(value)
        case _:
            msg = f"'{field}' must be a list, got {type(value).__name__}."
            raise DocularConfigError(msg)


def _resolve_path(value: str | Path, base_dir: Path) -> Path:
    """Resolve ``value`` against ``base_dir`` unless it is already absolute."""
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return (base_dir / path).resolve()


def _resolve_paths(value: object | None, *, field: str, base_dir: Path) -> list[Path]:
    """Resolve every entry of a path list against ``base_dir``."""
    return [_resolve_path(str(item), base_dir) for item in _as_list(value, field=field)]


def _optional_path(value: object | None, base_dir: Path) -> Path | None:
    """Return a resolved path or None when the value is unset or ``false``."""
    text = _optional_str(value)
    if text is None:
        return None
    return _resolve_path(text, base_dir)


__all__ = [
    "_as_bool",
    "_as_list",
    "_as_mapping",
    "_optional_path",
    "_optional_str",
    "_resolve_path",
    "_resolve_paths",
]
