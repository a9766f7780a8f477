import pytest

from app_core.loaders.signal_dates import MONTHS, normalize_date, parse_canonical, format_canonical


@pytest.mark.parametrize("raw", ["2024-03-05", "20240305", "03/05/2024", "2024/03/05", "3/5/2024", "2024/3/5"])
def test_normalize_date_accepted_formats(raw):
    assert normalize_date(raw) == "2024-03-05"


def test_normalize_date_canonical_is_unchanged():
    for d in ["2024-01-01", "1999-12-31", "2024-02-29"]:
        assert normalize_date(d) == d
        assert normalize_date(normalize_date(d)) == d


@pytest.mark.parametrize("raw", ["2023-02-30", "20230230", "02/30/2023", "2023/13/01", "2024-00-10"])
def test_normalize_date_rejects_impossible_days(raw):
    assert normalize_date(raw) is None


@pytest.mark.parametrize("raw", ["", None, "   ", "yesterday", "2024-3-5x", "03/05/24", "1/2/3/2024", "ab/cd/2024"])
def test_normalize_date_rejects_garbage(raw):
    assert normalize_date(raw) is None


def test_normalize_date_strips_whitespace():
    assert normalize_date("  2024-03-05\r") == "2024-03-05"


@pytest.mark.parametrize(
    "raw",
    [
        "Mar 5, 2024", "March 5, 2024", "5 Mar 2024", "2024.03.05", "05.03.2024",
        "2024-03-05T10:30:00", "2024-03-05 10:30", "2024-3-5", "2024-3-5 10:30",
    ],
)
def test_normalize_date_enumerated_fallbacks(raw):
    assert normalize_date(raw) == "2024-03-05"


def test_fallback_years_are_bounded():
    assert normalize_date("Mar 5, 1900") is None
    assert normalize_date("Mar 5, 2100") is None
    assert normalize_date("Mar 5, 1901") == "1901-03-05"


def test_parse_and_format_canonical():
    d = parse_canonical("2024-02-29")
    assert d is not None
    assert format_canonical(d) == "2024-02-29"
    assert parse_canonical("2023-02-29") is None
    assert parse_canonical("20240229") is None


@pytest.mark.parametrize("raw", ["mar 5, 2024", "MARCH 5 2024", "Mar. 5, 2024", "5 march 2024", "Sept 5, 2024"])
def test_month_names_are_english_and_case_insensitive(raw):
    expected = "2024-09-05" if raw.startswith("Sept") else "2024-03-05"
    assert normalize_date(raw) == expected


def test_month_names_come_from_fixed_english_table():
    assert sorted(set(MONTHS.values())) == list(range(1, 13))
    assert normalize_date("5 Maerz 2024") is None
    assert normalize_date("5 Mär 2024") is None
    assert normalize_date("Feb 30, 2024") is None
    assert normalize_date("Dec 31, 2024") == "2024-12-31"


def test_unpadded_date_with_impossible_day_is_rejected():
    assert normalize_date("2023-2-30") is None
