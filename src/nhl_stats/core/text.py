from __future__ import annotations

import re

_non_alnum_re = re.compile(r"[^a-z0-9]")


def normalize_label(value: str) -> str:
    """Normalize a category/division label for stable matching across sources."""

    return _non_alnum_re.sub("", value.strip().lower())


def format_season(season: object) -> str | None:
    """Render an eight-digit season id (20242025) as 2024-2025."""

    s = str(season).strip() if season is not None else ""
    if len(s) == 8 and s.isdigit():
        return f"{s[:4]}-{s[4:]}"
    return s or None


def format_height(inches: int | None, centimeters: int | None = None) -> str | None:
    if not inches:
        return None
    cm = centimeters or round(inches * 2.54)
    return f"{inches // 12}'{inches % 12}\" ({cm} cm)"


def format_weight(pounds: int | None, kilograms: int | None = None) -> str | None:
    if not pounds:
        return None
    kg = kilograms or round(pounds * 0.453592)
    return f"{pounds} lbs ({kg} kg)"
