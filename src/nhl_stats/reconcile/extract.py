"""Defensive accessors for untyped upstream documents.

Every accessor takes a document, a primary path and any number of fallback
paths, and returns the first value that has the requested type. Paths are
dotted strings (``"teamAbbrev.default"``, ``"teamStats.0.wins"``); a numeric
segment indexes into a list. Localized wrappers such as
``{"default": "Toronto", "fr": "Toronto"}`` are unwrapped to their
``default`` value.

None of these functions raise on missing keys, nulls or wrong types: the
answer in those cases is ``None`` ("field unknown").
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

T = TypeVar("T")

Path = str


def dig(document: Any, path: Path) -> Any:
    """Walk ``path`` through nested mappings and lists; ``None`` if any step is missing."""
    current = document
    for part in path.split(".") if path else ():
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def unwrap(value: Any) -> Any:
    """Unwrap a localized ``{"default": ...}`` object; anything else passes through."""
    if isinstance(value, Mapping) and "default" in value:
        return value["default"]
    return value


def _first(document: Any, paths: tuple[Path, ...], accept: Callable[[Any], T | None]) -> T | None:
    for path in paths:
        result = accept(unwrap(dig(document, path)))
        if result is not None:
            return result
    return None


def _as_str(value: Any) -> str | None:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def _as_number(value: Any) -> int | float | None:
    # bool is an int subclass but never a count or a rate.
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


def _as_int(value: Any) -> int | None:
    number = _as_number(value)
    if isinstance(number, float):
        return int(number) if number.is_integer() else None
    return number


def _as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _as_list(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) and value else None


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) and value else None


def extract_str(document: Any, path: Path, *fallbacks: Path) -> str | None:
    return _first(document, (path, *fallbacks), _as_str)


def extract_number(document: Any, path: Path, *fallbacks: Path) -> int | float | None:
    return _first(document, (path, *fallbacks), _as_number)


def extract_int(document: Any, path: Path, *fallbacks: Path) -> int | None:
    return _first(document, (path, *fallbacks), _as_int)


def extract_bool(document: Any, path: Path, *fallbacks: Path) -> bool | None:
    return _first(document, (path, *fallbacks), _as_bool)


def extract_list(document: Any, path: Path, *fallbacks: Path) -> list[Any] | None:
    """First non-empty list found. An empty list counts as absent."""
    return _first(document, (path, *fallbacks), _as_list)


def extract_mapping(document: Any, path: Path, *fallbacks: Path) -> Mapping[str, Any] | None:
    """First non-empty object found. An empty object counts as absent."""
    for candidate in (path, *fallbacks):
        result = _as_mapping(dig(document, candidate))
        if result is not None:
            return result
    return None


def mappings(items: Any) -> list[Mapping[str, Any]]:
    """Keep only the object entries of a list; anything else yields []."""
    if not isinstance(items, list):
        return []
    return [i for i in items if isinstance(i, Mapping)]


def safe_display(value: Any, default: str = "N/A") -> str:
    """
    Render a value for text output.

    Objects and arrays never turn into a generic marker: they render as
    ``default``, as do missing and blank values.
    """
    value = unwrap(value)
    if value is None:
        return default
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, str):
        return value if value.strip() else default
    if isinstance(value, (int, float)):
        return str(value)
    return default
