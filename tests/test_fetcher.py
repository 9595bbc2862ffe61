# tests/test_fetcher.py

import pytest
import requests

from scraper_autoconfig.config import ConfigError, FetcherConfig, MockPage
from scraper_autoconfig.fetcher import FetchError, Fetcher, MockFetcher, new_fetcher


class _FakeResponse:
    def __init__(self, status_code, text="", url="https://example.com/final"):
        self.status_code = status_code
        self.text = text
        self.url = url


def _fetcher_returning(monkeypatch, result):
    fetcher = Fetcher(user_agent="test-agent")

    def fake_get(url, timeout=None, allow_redirects=True):
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(fetcher.session, "get", fake_get)
    return fetcher


def test_fetch_success(monkeypatch):
    fetcher = _fetcher_returning(monkeypatch, _FakeResponse(200, "<html></html>"))
    page = fetcher.fetch("https://example.com")

    assert page.error is None
    assert page.status_code == 200
    assert page.text == "<html></html>"
    assert page.final_url == "https://example.com/final"
    assert fetcher.session.headers["User-Agent"] == "test-agent"


def test_fetch_http_error_is_reported(monkeypatch):
    fetcher = _fetcher_returning(monkeypatch, _FakeResponse(404))
    page = fetcher.fetch("https://example.com/missing")

    assert page.text is None
    assert page.status_code == 404
    assert page.error == "HTTP 404"


def test_fetch_network_error_is_reported(monkeypatch):
    fetcher = _fetcher_returning(monkeypatch, requests.exceptions.ConnectionError("refused"))
    page = fetcher.fetch("https://example.com")

    assert page.status_code == 0
    assert page.text is None
    assert "refused" in page.error


def test_fetch_unexpected_error_raises(monkeypatch):
    fetcher = _fetcher_returning(monkeypatch, RuntimeError("boom"))
    with pytest.raises(FetchError):
        fetcher.fetch("https://example.com")


def test_mock_fetcher():
    fetcher = MockFetcher([MockPage(url="https://example.com", content="<p>x</p>")])

    page = fetcher.fetch("https://example.com")
    assert (page.status_code, page.text, page.error) == (200, "<p>x</p>", None)

    missing = fetcher.fetch("https://example.com/other")
    assert missing.text is None
    assert missing.error


def test_new_fetcher():
    assert isinstance(new_fetcher(FetcherConfig()), Fetcher)
    assert isinstance(new_fetcher(FetcherConfig(fetcher_type="mock")), MockFetcher)
    with pytest.raises(ConfigError):
        new_fetcher(FetcherConfig(fetcher_type="chrome"))
