from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import fields, is_dataclass, replace
from typing import Any, TypeVar

R = TypeVar("R")


def is_absent(value: Any) -> bool:
    """
    Structural absence only: None, blank strings, empty collections, and
    nested records with nothing set. 0 and False are present data.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    if is_dataclass(value) and not isinstance(value, type):
        return all(is_absent(getattr(value, f.name)) for f in fields(value))
    return False


def _is_record(value: Any) -> bool:
    return is_dataclass(value) and not isinstance(value, type)


def merge_value(current: Any, incoming: Any) -> Any:
    if is_absent(current):
        return current if is_absent(incoming) else incoming
    if _is_record(current) and _is_record(incoming) and type(current) is type(incoming):
        return merge_records(current, incoming)
    return current


def merge_records(accumulator: R, partial: R | None, *, only: Iterable[str] | None = None) -> R:
    """
    Non-regression merge: a field already holding a value keeps it; absent
    fields adopt the partial record's value. Nested records merge field by
    field under the same rule.

    `only` restricts the merge to the named fields.
    """
    if partial is None:
        return accumulator
    if type(partial) is not type(accumulator):
        raise TypeError(
            f"Cannot merge {type(partial).__name__} into {type(accumulator).__name__}"
        )

    allowed = set(only) if only is not None else None
    changes: dict[str, Any] = {}
    for f in fields(accumulator):  # type: ignore[arg-type]
        if allowed is not None and f.name not in allowed:
            continue
        current = getattr(accumulator, f.name)
        merged = merge_value(current, getattr(partial, f.name))
        if merged is not current:
            changes[f.name] = merged

    return replace(accumulator, **changes) if changes else accumulator  # type: ignore[type-var]


def has_any(record: Any, names: Iterable[str]) -> bool:
    return any(not is_absent(getattr(record, name)) for name in names)


def has_all(record: Any, names: Iterable[str]) -> bool:
    return all(not is_absent(getattr(record, name)) for name in names)
