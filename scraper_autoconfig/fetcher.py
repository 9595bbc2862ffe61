# scraper_autoconfig/fetcher.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Union

import requests
from requests import Response

from .config import ConfigError, FetcherConfig, MockPage

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    """
    Result of fetching a single URL: the raw HTTP-level outcome before any
    analysis happens.
    """

    url: str                  # URL we attempted to fetch
    status_code: int          # HTTP status code (e.g., 200, 404, 503), 0 if no response
    text: Optional[str]       # Response body as text (HTML), or None on failure
    final_url: Optional[str]  # Final URL after redirects, if any
    error: Optional[str]      # Error message if something went wrong


class FetchError(Exception):
    """Custom exception raised when fetching fails in a non-recoverable way"""
    pass


class Fetcher:
    """
    Static HTTP fetcher using the `requests` library.

    One GET per page, no retries and no JavaScript rendering: the generated
    selectors describe the HTML exactly as the server delivers it.
    """

    def __init__(
        self,
        user_agent: str,
        timeout_seconds: int = 10,
    ) -> None:
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.user_agent})

    def fetch(self, url: str) -> FetchedPage:
        """
        Fetch a single URL and return a FetchedPage.

        HTTP errors and network failures are reported through FetchedPage.error;
        only something fundamentally unexpected raises FetchError.
        """
        try:
            logger.debug("Fetching URL %s", url)
            resp: Response = self.session.get(
                url,
                timeout=self.timeout_seconds,
                allow_redirects=True,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Network error for %s: %s", url, e)
            return FetchedPage(url=url, status_code=0, text=None, final_url=None, error=str(e))
        except Exception as e:
            logger.error("Unexpected error fetching %s: %s", url, e, exc_info=True)
            raise FetchError(f"Unexpected error fetching {url}: {e}") from e

        if 200 <= resp.status_code < 400:
            logger.info("Fetched %s with status %d", url, resp.status_code)
            return FetchedPage(
                url=url,
                status_code=resp.status_code,
                text=resp.text,
                final_url=str(resp.url),
                error=None,
            )

        logger.warning("Non-success status %d for URL %s", resp.status_code, url)
        return FetchedPage(
            url=url,
            status_code=resp.status_code,
            text=None,
            final_url=str(resp.url),
            error=f"HTTP {resp.status_code}",
        )


class MockFetcher:
    """
    Serves pages from memory, keyed by URL. Used for fixtures and offline runs.
    """

    def __init__(self, pages: Union[Dict[str, str], Iterable[MockPage]]) -> None:
        if isinstance(pages, dict):
            self.pages = dict(pages)
        else:
            self.pages = {p.url: p.content for p in pages}

    def fetch(self, url: str) -> FetchedPage:
        if url not in self.pages:
            logger.warning("No mock page registered for %s", url)
            return FetchedPage(
                url=url,
                status_code=404,
                text=None,
                final_url=None,
                error=f"no mock page for {url}",
            )
        logger.info("Serving mock page for %s", url)
        return FetchedPage(url=url, status_code=200, text=self.pages[url], final_url=url, error=None)


def new_fetcher(config: FetcherConfig):
    if config.fetcher_type == "static":
        return Fetcher(user_agent=config.user_agent, timeout_seconds=config.timeout_seconds)
    if config.fetcher_type == "mock":
        return MockFetcher(config.mock_pages)
    raise ConfigError(f"Unknown fetcher type {config.fetcher_type!r} (expected 'static' or 'mock')")
