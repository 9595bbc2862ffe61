# scraper_autoconfig/synthesize.py

from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Sequence
from .config_behavior import (
    DATE_COMPONENT_PREFIX,
    ITEM_SELECTOR_MIN_CLASSES,
    MAX_LOCATION_EXAMPLES,
    URL_ATTRS,
)
from .dates import CoveredDateParts, get_date_format_multi
from .models import FieldCandidate, Node, copy_path, path_string, trim_prefix
from .scraper_config import DateComponent, ElementLocation, Field, ScraperConfig

logger = logging.getLogger(__name__)


class GenerateError(Exception):
    """Base class for errors that stop a config from being generated"""
    pass


class NothingToGenerateError(GenerateError):
    """Raised when no field group was selected"""
    pass


def find_root_selector(groups: Sequence[FieldCandidate]) -> List[Node]:
    """
    Longest common path prefix of all groups. This is the item (card) element
    every field is located relative to.
    """
    first = groups[0].path
    i = 0
    while True:
        for g in groups:
            if i >= len(g.path) or g.path[i] != first[i]:
                return copy_path(first[:i])
        i += 1


def date_location() -> str:
    """
    Abbreviation of the local timezone, e.g. "CET".
    """
    zone = datetime.now().astimezone().tzname() or ""
    # scrapers only understand the standard-time name
    return zone.replace("CEST", "CET", 1)


def covered_parts_from_name(name: str) -> CoveredDateParts:
    return CoveredDateParts(
        day="day" in name,
        month="month" in name,
        year="year" in name,
        time="time" in name,
    )


def build_scraper_config(groups: Sequence[FieldCandidate], url: str) -> ScraperConfig:
    """
    Turn the selected field groups of a page into a scraper config.

    Groups named "date-component..." are folded into one composite "date"
    field appended after all other fields.
    """
    selected = [g for g in groups if g.selected]
    if not selected:
        raise NothingToGenerateError("no fields selected")

    root = find_root_selector(selected)
    if len(selected) == 1:
        logger.warning(
            "Only one field selected; the item selector covers its full path and "
            "the field selector will be empty"
        )

    config = ScraperConfig(
        name=url,
        url=url,
        item=path_string(trim_prefix(root, ITEM_SELECTOR_MIN_CLASSES)),
    )
    logger.info("Item selector: %s", config.item)

    date_field = Field(name="date", type="date", date_location=date_location())

    for g in selected:
        examples = g.example_values()
        loc = ElementLocation(
            selector=path_string(g.path[len(root):]),
            attr=g.attr,
            child_index=g.text_index,
            examples=examples[:MAX_LOCATION_EXAMPLES],
        )

        if g.name.startswith(DATE_COMPONENT_PREFIX):
            covers = covered_parts_from_name(g.name)
            layout, language = get_date_format_multi(examples, covers)
            date_field.components.append(
                DateComponent(covers=covers, location=loc, layout=[layout])
            )
            # first language wins
            if not date_field.date_language:
                date_field.date_language = language
            continue

        field_type = "url" if g.attr in URL_ATTRS else "text"
        config.fields.append(Field(name=g.name, type=field_type, locations=[loc]))

    if date_field.components:
        config.fields.append(date_field)

    logger.info("Generated config with %d field(s)", len(config.fields))
    return config
