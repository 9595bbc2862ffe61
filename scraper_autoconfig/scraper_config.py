# scraper_autoconfig/scraper_config.py
"""
The scraper configuration produced by a generate run. Field names follow the
keys a scraper expects when it reads the written YAML back in.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional
from .dates import CoveredDateParts


def _drop_empty(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v not in (None, "", [], {}, 0, False)}


@dataclass
class RegexConfig:
    exp: str
    index: int = 0
    ignore_errors: bool = False


@dataclass
class ElementLocation:
    """
    Where a single string lives inside one item, relative to the item selector.
    """

    selector: str = ""
    attr: str = ""
    child_index: int = 0
    regex_extract: Optional[RegexConfig] = None
    max_length: int = 0
    examples: List[str] = field(default_factory=list)  # hints for the user, written commented out

    def to_serializable_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "selector": self.selector,
            "child_index": self.child_index,
            "regex_extract": asdict(self.regex_extract) if self.regex_extract else None,
            "attr": self.attr,
            "max_length": self.max_length,
            "examples": list(self.examples),
        }
        return _drop_empty(d)


@dataclass
class DateComponent:
    covers: CoveredDateParts
    location: ElementLocation
    layout: List[str] = field(default_factory=list)

    def to_serializable_dict(self) -> Dict[str, Any]:
        return {
            "covers": _drop_empty(asdict(self.covers)),
            "location": self.location.to_serializable_dict(),
            "layout": list(self.layout),
        }


@dataclass
class Field:
    """
    One output field: plain text, a url, or the composite date assembled from
    its components.
    """

    name: str
    type: str = "text"  # text | url | date
    locations: List[ElementLocation] = field(default_factory=list)
    components: List[DateComponent] = field(default_factory=list)
    date_location: str = ""
    date_language: str = ""

    def to_serializable_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "location": [loc.to_serializable_dict() for loc in self.locations],
            "components": [c.to_serializable_dict() for c in self.components],
            "date_location": self.date_location,
            "date_language": self.date_language,
        }
        return _drop_empty(d)


@dataclass
class ScraperConfig:
    name: str
    url: str
    item: str = ""
    fields: List[Field] = field(default_factory=list)

    def to_serializable_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "name": self.name,
            "url": self.url,
            "item": self.item,
        }
        fields = [f.to_serializable_dict() for f in self.fields]
        if fields:
            d["fields"] = fields
        return d
