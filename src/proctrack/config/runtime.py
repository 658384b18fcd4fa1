"""Environment-backed configuration lookups.

Values come from the process environment first, then from the first
``.env``-style file that defines them (``./.env``, then ``~/.proctrack.env``).
Malformed values raise ``ConfigurationError`` naming the variable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")

_BOOLEAN_WORDS: Dict[str, bool] = {
    **dict.fromkeys(("1", "true", "t", "yes", "y", "on"), True),
    **dict.fromkeys(("0", "false", "f", "no", "n", "off"), False),
}

_DOTENV_CANDIDATES: Tuple[Path, ...] = (Path(".env"), Path.home() / ".proctrack.env")

_DEFAULT_VALUES: Optional[Dict[str, str]] = None


def _load_default_values() -> Dict[str, str]:
    from .runtime_helpers import DotenvLoader

    global _DEFAULT_VALUES
    if _DEFAULT_VALUES is None:
        merged: Dict[str, str] = {}
        for candidate in _DOTENV_CANDIDATES:
            for key, value in DotenvLoader.load_from_file(candidate).items():
                merged.setdefault(key, value)
        _DEFAULT_VALUES = merged
    return _DEFAULT_VALUES


def reset_default_values() -> None:
    """Drop cached file defaults; the next lookup reads the files again."""
    global _DEFAULT_VALUES
    _DEFAULT_VALUES = None


def _missing(name: str) -> ConfigurationError:
    return ConfigurationError.missing_value(name, "required environment variable")


def _lookup(name: str, *, strip: bool, allow_blank: bool) -> Optional[str]:
    for raw in (os.environ.get(name), _load_default_values().get(name)):
        if raw is None:
            continue
        value = raw.strip() if strip else raw
        if value or allow_blank:
            return value
    return None


def env_str(
    name: str,
    or_value: Optional[str] = None,
    *,
    required: bool = False,
    strip: bool = True,
    allow_blank: bool = False,
) -> Optional[str]:
    """Return ``name`` as a string, ``or_value`` when unset."""
    value = _lookup(name, strip=strip, allow_blank=allow_blank)
    if value is not None:
        return value
    if required:
        raise _missing(name)
    return or_value


def _typed(name: str, or_value: Optional[T], required: bool, parse: Callable[[str], T], kind: str) -> Optional[T]:
    raw = _lookup(name, strip=True, allow_blank=False)
    if raw is None:
        if required and or_value is None:
            raise _missing(name)
        return or_value
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigurationError.invalid_value(name, raw, f"Expected {kind}") from exc


def _parse_bool(raw: str) -> bool:
    try:
        return _BOOLEAN_WORDS[raw.lower()]
    except KeyError:
        raise ValueError(raw) from None


def env_int(name: str, or_value: Optional[int] = None, *, required: bool = False) -> Optional[int]:
    return _typed(name, or_value, required, int, "an integer")


def env_float(name: str, or_value: Optional[float] = None, *, required: bool = False) -> Optional[float]:
    return _typed(name, or_value, required, float, "a number")


def env_bool(name: str, or_value: Optional[bool] = None, *, required: bool = False) -> Optional[bool]:
    """Accepts 1/0, true/false, t/f, yes/no, y/n and on/off in any case."""
    return _typed(name, or_value, required, _parse_bool, "a boolean")


def env_list(
    name: str,
    *,
    or_value: Optional[Sequence[str]] = None,
    separator: str = ",",
    casefold_unique: bool = False,
    required: bool = False,
) -> Optional[Tuple[str, ...]]:
    """Split ``name`` on ``separator``; blanks dropped, duplicates removed in order.

    With ``casefold_unique`` duplicates differing only in case are removed too.
    """
    from .runtime_helpers import ListNormalizer

    raw = _lookup(name, strip=True, allow_blank=False)
    if raw is None:
        if required and not or_value:
            raise _missing(name)
        return tuple(or_value) if or_value is not None else None

    items = ListNormalizer.split_and_normalize(raw, separator, strip_items=True)
    if not items and required:
        raise ConfigurationError.invalid_value(name, raw, "Expected at least one value")
    return ListNormalizer.deduplicate_preserving_order(items, casefold=casefold_unique)


__all__ = ["env_bool", "env_float", "env_int", "env_list", "env_str", "reset_default_values"]
