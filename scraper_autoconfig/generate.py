# scraper_autoconfig/generate.py

from __future__ import annotations
import logging
from .config import GenerateConfig
from .fetcher import new_fetcher
from .fieldmanager import FieldManager
from .labeler import new_labeler
from .scraper_config import ScraperConfig
from .selector import select_fields
from .synthesize import GenerateError, build_scraper_config

logger = logging.getLogger(__name__)


class EmptyURLError(GenerateError):
    """Raised when no URL was given"""
    pass


class PageFetchError(GenerateError):
    """Raised when the page could not be fetched"""
    pass


class NoFieldsFoundError(GenerateError):
    """Raised when no field group survived squashing and filtering"""
    pass


def generate_config(
    url: str,
    config: GenerateConfig,
    interactive: bool = False,
    fetcher=None,
    labeler=None,
) -> ScraperConfig:
    """
    fetch -> index -> squash/filter/colour -> label -> select -> synthesize

    `fetcher` and `labeler` default to the ones described by `config`.
    """
    if not url:
        raise EmptyURLError("URL field cannot be empty")
    logger.info("Analyzing url %s", url)

    fetcher = fetcher or new_fetcher(config.fetcher)
    labeler = labeler or new_labeler(config.labeler)

    page = fetcher.fetch(url)
    if page.error or page.text is None:
        raise PageFetchError(f"Could not fetch {url}: {page.error or 'empty response'}")

    manager = FieldManager.from_html(page.text)
    logger.info("Found %d raw field candidate(s)", len(manager))

    manager.process(config.min_occurrences, config.distinct_values, labeler)
    if len(manager) == 0:
        raise NoFieldsFoundError(
            f"no fields found (min_occurrences={config.min_occurrences})"
        )

    selected = select_fields(manager.candidates, interactive)
    return build_scraper_config(selected, url)
