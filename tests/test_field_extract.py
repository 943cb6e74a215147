from __future__ import annotations

from nhl_stats.reconcile.extract import (
    dig,
    extract_bool,
    extract_int,
    extract_list,
    extract_mapping,
    extract_number,
    extract_str,
    mappings,
    safe_display,
)

DOC = {
    "firstName": {"default": "Connor", "cs": "Connor"},
    "lastName": "McDavid",
    "sweaterNumber": 97,
    "isActive": True,
    "shootingPctg": 0.1525,
    "teamStats": [{"wins": 41, "points": 0}],
    "birthCity": {"fr": "Richmond Hill"},
    "awards": [],
    "nothing": None,
}


def test_extract_primitive_and_localized_wrapper() -> None:
    assert extract_str(DOC, "lastName") == "McDavid"
    assert extract_str(DOC, "firstName") == "Connor"
    assert extract_int(DOC, "sweaterNumber") == 97
    assert extract_bool(DOC, "isActive") is True
    assert extract_number(DOC, "shootingPctg") == 0.1525


def test_extract_uses_fallback_paths_in_order() -> None:
    assert extract_str(DOC, "fullName", "skaterFullName", "lastName") == "McDavid"
    assert extract_int(DOC, "wins", "teamStats.0.wins") == 41


def test_extract_missing_or_null_is_absent() -> None:
    assert extract_str(DOC, "missing") is None
    assert extract_str(DOC, "nothing") is None
    assert extract_int(DOC, "teamStats.5.wins") is None
    assert extract_str(None, "anything") is None
    assert extract_str("not a document", "a.b") is None


def test_extract_type_mismatch_is_absent_not_coerced() -> None:
    # A wrapper without "default" is an object, never a string.
    assert extract_str(DOC, "birthCity") is None
    assert extract_int(DOC, "lastName") is None
    assert extract_number(DOC, "isActive") is None
    assert extract_bool(DOC, "sweaterNumber") is None
    assert extract_str(DOC, "teamStats") is None


def test_zero_is_present_data() -> None:
    assert extract_int(DOC, "teamStats.0.points") == 0


def test_extract_int_rejects_fractional_numbers() -> None:
    assert extract_int({"v": 12.0}, "v") == 12
    assert extract_int({"v": 0.5}, "v") is None


def test_empty_collections_are_absent() -> None:
    assert extract_list(DOC, "awards") is None
    assert extract_list(DOC, "awards", "teamStats") == [{"wins": 41, "points": 0}]
    assert extract_mapping({"a": {}}, "a") is None


def test_dig_and_mappings_tolerate_junk() -> None:
    assert dig(DOC, "teamStats.0.wins") == 41
    assert dig(DOC, "lastName.default") is None
    assert mappings([{"a": 1}, "x", None, 3]) == [{"a": 1}]
    assert mappings({"a": 1}) == []


def test_safe_display_never_renders_objects() -> None:
    assert safe_display({"default": "Toronto"}) == "Toronto"
    assert safe_display({"fr": "Montréal"}, "Unknown") == "Unknown"
    assert safe_display([1, 2, 3], "N/A") == "N/A"
    assert safe_display(None, "N/A") == "N/A"
    assert safe_display("   ", "N/A") == "N/A"
    assert safe_display(0) == "0"
    assert safe_display(97) == "97"
    assert safe_display(False) == "No"
