from urllib.error import URLError

import pytest

import ical_utils
from ical_utils import FetchError, Fetcher


class FakeResponse:
    def __init__(self, data):
        self.data = data

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def read(self):
        return self.data


def fake_urlopen(responses, calls):
    def _urlopen(req, timeout=None):
        calls.append(req.full_url)
        result = responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return FakeResponse(result)

    return _urlopen


def test_fetch_text(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(ical_utils, "urlopen", fake_urlopen([b"BEGIN:VCALENDAR"], calls))
    assert Fetcher(delay=0).fetch_text("https://example.com/a.ics") == "BEGIN:VCALENDAR"
    assert calls == ["https://example.com/a.ics"]


def test_cache_is_per_instance(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(ical_utils, "urlopen", fake_urlopen([b"one", b"two", b"three"], calls))
    fetcher = Fetcher(delay=0, cache_ttl=300)
    assert fetcher.fetch_bytes("https://example.com/a.ics") == b"one"
    assert fetcher.fetch_bytes("https://example.com/a.ics") == b"one"
    assert Fetcher(delay=0, cache_ttl=300).fetch_bytes("https://example.com/a.ics") == b"two"
    assert len(calls) == 2


def test_no_cache_without_ttl(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(ical_utils, "urlopen", fake_urlopen([b"one", b"two"], calls))
    fetcher = Fetcher(delay=0)
    fetcher.fetch_bytes("https://example.com/a.ics")
    assert fetcher.fetch_bytes("https://example.com/a.ics") == b"two"


def test_retries_then_succeeds(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(ical_utils, "urlopen", fake_urlopen([URLError("down"), b"ok"], calls))
    assert Fetcher(retries=3, delay=0).fetch_bytes("https://example.com/a.ics") == b"ok"
    assert len(calls) == 2


def test_gives_up_after_retries(monkeypatch) -> None:
    calls = []
    errors = [URLError("down"), URLError("down"), URLError("down")]
    monkeypatch.setattr(ical_utils, "urlopen", fake_urlopen(errors, calls))
    with pytest.raises(FetchError):
        Fetcher(retries=3, delay=0).fetch_bytes("https://example.com/a.ics")
    assert len(calls) == 3


def test_empty_response_is_a_failure(monkeypatch) -> None:
    monkeypatch.setattr(ical_utils, "urlopen", fake_urlopen([b""], []))
    with pytest.raises(FetchError):
        Fetcher(retries=1, delay=0).fetch_bytes("https://example.com/a.ics")


def test_from_config() -> None:
    fetcher = Fetcher.from_config({"timeout": 5, "retries": 2, "delay": 1, "cache_ttl": 60})
    assert (fetcher.timeout, fetcher.retries, fetcher.delay, fetcher.cache_ttl) == (5, 2, 1, 60)
