from __future__ import annotations

import pytest

from gatelog.orchestrator.plate_patterns import BROAD_PLATE, STRICT_PLATE, extract_plate, normalize


def test_normalize_strips_all_whitespace() -> None:
    assert normalize(" MH 12\tAB\n1234 \r\n") == "MH12AB1234"
    assert normalize("") == ""


def test_spaced_plate_matches_strict_pattern() -> None:
    assert STRICT_PLATE.first_match(normalize("MH 12 AB 1234")) == "MH12AB1234"
    assert extract_plate("MH 12 AB 1234") == "MH12AB1234"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("mh12ab1234", "MH12AB1234"),
        ("DL1C12345", "DL1C12345"),
        ("Reg: KA01EF9012.", "KA01EF9012"),
        ("22 BH 1234 A", "22BH1234A"),
        ("INDIA\nMH12AB1234\n", "MH12AB1234"),
    ],
)
def test_strict_plate_shapes(raw: str, expected: str) -> None:
    assert extract_plate(raw) == expected


def test_broad_pattern_salvages_plate_length_run() -> None:
    assert STRICT_PLATE.first_match("ABCDEFGHIJKLM") is None
    assert extract_plate("ABCDEFGHIJKLM") == "ABCDEFGHIJKLM"
    assert extract_plate("abcd-efgh") is None
    assert extract_plate("x|abcd1234efg|y") == "ABCD1234EFG"


def test_broad_pattern_ignores_runs_longer_than_thirteen() -> None:
    assert BROAD_PLATE.first_match("ABCDEFGHIJKLMN") is None
    assert extract_plate("no plate visible") is None


@pytest.mark.parametrize("raw", ["X1", "", "   \n", "AB-12", "1234567"])
def test_too_short_or_empty_yields_none(raw: str) -> None:
    assert extract_plate(raw) is None


def test_extract_is_repeatable() -> None:
    raw = "  ka 01 ef 9012\n"
    assert extract_plate(raw) == extract_plate(raw) == "KA01EF9012"
