import pytest
import requests

import app_core.loaders.signal_csv as sc
from app_core.errors import InsufficientData, NetworkError, NoValidRows, SignalLoadError


class _FakeResp:
    def __init__(self, text, status_ok=True, status_code=200):
        self.text = text
        self._ok = status_ok
        self.status_code = status_code
        self.encoding = None

    def raise_for_status(self):
        if not self._ok:
            raise requests.HTTPError(f"{self.status_code} Server Error")


def test_parse_end_to_end_example(signal_csv_text):
    ds = sc.parse_signal_csv(signal_csv_text)

    assert ds.signal_names == ["foo_signal", "bar_signal"]
    assert [r.date for r in ds.series] == ["2024-01-01", "2024-01-02"]
    assert ds.series[0].get("foo_signal") == "buy"
    assert ds.dropped_rows == 0


def test_parse_sorts_rows_ascending():
    text = "date,a_signal\n2024-01-03,buy\n2024-01-01,sell\n2024-01-02,hold\n"
    ds = sc.parse_signal_csv(text)
    assert [r.date for r in ds.series] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [r.get("a_signal") for r in ds.series] == ["sell", "hold", "buy"]


def test_parse_mixed_date_formats_normalized():
    text = "date,a_signal\n20240305,buy\n03/06/2024,sell\n2024/03/04,hold\n"
    ds = sc.parse_signal_csv(text)
    assert [r.date for r in ds.series] == ["2024-03-04", "2024-03-05", "2024-03-06"]


def test_parse_header_only_is_insufficient():
    with pytest.raises(InsufficientData):
        sc.parse_signal_csv("date,foo_signal,bar_signal\n")


def test_parse_empty_text_is_insufficient():
    with pytest.raises(InsufficientData):
        sc.parse_signal_csv("")


def test_parse_all_rows_invalid_raises_no_valid_rows():
    text = "date,a_signal\n2023-02-30,buy\nnot-a-date,sell\n"
    with pytest.raises(NoValidRows):
        sc.parse_signal_csv(text)


def test_parse_drops_short_rows_and_bad_dates_silently():
    # lossy on purpose: malformed rows vanish instead of failing the load
    text = (
        "date,a_signal,b_signal\n"
        "2024-01-01,buy,sell\n"
        "2024-01-02,buy\n"
        "\n"
        "20230230,buy,buy\n"
        "2024-01-03,sell,hold\n"
    )
    ds = sc.parse_signal_csv(text)
    assert [r.date for r in ds.series] == ["2024-01-01", "2024-01-03"]
    assert ds.dropped_rows == 3


def test_parse_signal_columns_and_copied_columns():
    text = "Date,close,rsi_signal,,macd_signal\n2024-01-01,101.5,buy,x,\n"
    ds = sc.parse_signal_csv(text)

    assert ds.signal_names == ["rsi_signal", "macd_signal"]
    assert ds.columns == ["close", "rsi_signal", "macd_signal"]
    row = ds.series[0]
    assert row.get("close") == "101.5"
    assert row.get("macd_signal") is None  # empty cell -> None
    assert "" not in row.values


def test_parse_handles_crlf_and_padding():
    text = "date , a_signal \r\n 2024-01-01 , Buy \r\n"
    ds = sc.parse_signal_csv(text)
    assert ds.signal_names == ["a_signal"]
    assert ds.series[0].date == "2024-01-01"
    assert ds.series[0].get("a_signal") == "Buy"


def test_parse_duplicate_dates_keep_file_order():
    text = "date,a_signal\n2024-01-02,sell\n2024-01-01,hold\n2024-01-02,buy\n"
    ds = sc.parse_signal_csv(text)
    assert [r.date for r in ds.series] == ["2024-01-01", "2024-01-02", "2024-01-02"]
    assert ds.series[1].get("a_signal") == "sell"


def test_signal_row_is_read_only():
    row = sc.SignalRow("2024-01-01", {"a_signal": "buy"})
    with pytest.raises(TypeError):
        row.values["a_signal"] = "sell"


def test_custom_marker():
    ds = sc.parse_signal_csv("date,rsi_sig,close\n2024-01-01,buy,1\n", marker="_sig")
    assert ds.signal_names == ["rsi_sig"]


def test_fetch_returns_text_and_passes_timeout(monkeypatch):
    seen = {}

    def fake_get(url, timeout=None):
        seen["url"] = url
        seen["timeout"] = timeout
        return _FakeResp("date,a_signal\n2024-01-01,buy\n")

    monkeypatch.setattr(sc.requests, "get", fake_get)

    text = sc.fetch_signal_csv("https://example.test/signals.csv", timeout=5)
    assert text.startswith("date,a_signal")
    assert seen == {"url": "https://example.test/signals.csv", "timeout": 5}


def test_fetch_http_error_becomes_network_error(monkeypatch):
    monkeypatch.setattr(sc.requests, "get", lambda url, timeout=None: _FakeResp("", status_ok=False, status_code=404))

    with pytest.raises(NetworkError) as info:
        sc.fetch_signal_csv("https://example.test/missing.csv")
    assert isinstance(info.value.__cause__, requests.HTTPError)


def test_fetch_connection_error_becomes_network_error(monkeypatch):
    def boom(url, timeout=None):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(sc.requests, "get", boom)

    with pytest.raises(SignalLoadError):
        sc.fetch_signal_csv("https://example.test/signals.csv")


def test_load_signal_dataset_fetches_and_parses(monkeypatch):
    monkeypatch.setattr(
        sc.requests, "get",
        lambda url, timeout=None: _FakeResp("date,a_signal\n2024-01-02,buy\n2024-01-01,sell\n"),
    )
    ds = sc.load_signal_dataset("https://example.test/signals.csv")
    assert [r.date for r in ds.series] == ["2024-01-01", "2024-01-02"]


def test_load_signal_dataset_uses_given_fetch(monkeypatch):
    def no_network(url, timeout=None):
        raise AssertionError("requests.get should not be called")

    monkeypatch.setattr(sc.requests, "get", no_network)
    seen = []

    def cached_fetch(url):
        seen.append(url)
        return "date,a_signal\n2024-01-01,buy\n"

    ds = sc.load_signal_dataset("https://example.test/signals.csv", fetch=cached_fetch)
    assert seen == ["https://example.test/signals.csv"]
    assert ds.signal_names == ["a_signal"]


def test_load_signal_dataset_propagates_fetch_errors():
    def failing_fetch(url):
        raise NetworkError("HTTP 503")

    with pytest.raises(NetworkError):
        sc.load_signal_dataset("https://example.test/signals.csv", fetch=failing_fetch)
