from __future__ import annotations

from ghscraper.core.numbers import format_count, parse_count


def test_parse_count_suffixes_and_separators() -> None:
    assert parse_count("1.2k") == 1200
    assert parse_count("3,400") == 3400
    assert parse_count("1.5M") == 1500000
    assert parse_count(" 71 ") == 71
    assert parse_count("2.6k\n") == 2600


def test_parse_count_unparseable_inputs_return_zero() -> None:
    assert parse_count("") == 0
    assert parse_count(None) == 0
    assert parse_count("bogus") == 0
    assert parse_count(".") == 0


def test_parse_count_falls_back_to_digits() -> None:
    assert parse_count("15 stars") == 15
    assert parse_count("v12") == 12


def test_format_count_groups_thousands() -> None:
    assert format_count(0) == "0"
    assert format_count(1234567) == "1,234,567"
    assert format_count("n/a") == "n/a"


def test_parse_count_rounds_half_up() -> None:
    assert parse_count("2.5") == 3
    assert parse_count("0.5") == 1
    assert parse_count("1.25k") == 1250


def test_parse_count_reads_longest_numeric_prefix() -> None:
    assert parse_count("1.2.3") == 1
    assert parse_count("1.2.3k") == 1200


def test_parse_count_overflowing_digit_runs_return_zero() -> None:
    assert parse_count("9" * 400) == 0
    assert parse_count("9" * 400 + " stars") == 0
    assert parse_count("9" * 400 + "k") == 0
