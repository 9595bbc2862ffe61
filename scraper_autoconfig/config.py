# scraper_autoconfig/config.py
"""
Runtime configuration of a generate run.

A GenerateConfig comes either from a named profile (config_runtime_profiles.py)
or from a YAML file shaped like a profile:

    min_occurrences: 20
    distinct_values: true
    labeler:
      type: local-ml
      model_name: models/fields
      words_dir: words
    fetcher:
      type: static
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml
from .config_runtime_profiles import GENERATE_PROFILES

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "scraper-autoconfig/0.1 (config generator)"


class ConfigError(Exception):
    """Raised when a generate config file or profile is invalid"""
    pass


@dataclass
class LabelerConfig:
    labeler_type: str = "basic"  # basic | local-ml | remote
    model_name: str = ""         # local-ml: feature table is read from <model_name>.csv
    words_dir: str = ""          # local-ml: directory of word lists
    remote_url: str = ""         # remote: labeling endpoint
    timeout_seconds: int = 30

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "LabelerConfig":
        d = d or {}
        return cls(
            labeler_type=str(d.get("type", "basic")),
            model_name=str(d.get("model_name", "")),
            words_dir=str(d.get("words_dir", "")),
            remote_url=str(d.get("remote_url", "")),
            timeout_seconds=int(d.get("timeout_seconds", 30)),
        )


@dataclass
class MockPage:
    url: str
    content: str


@dataclass
class FetcherConfig:
    fetcher_type: str = "static"  # static | mock
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: int = 10
    mock_pages: List[MockPage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "FetcherConfig":
        d = d or {}
        pages = []
        for p in d.get("mock_pages") or []:
            if not isinstance(p, dict) or "url" not in p:
                raise ConfigError(f"Invalid mock page entry: {p!r}")
            pages.append(MockPage(url=str(p["url"]), content=str(p.get("content", ""))))
        return cls(
            fetcher_type=str(d.get("type", "static")),
            user_agent=str(d.get("user_agent", DEFAULT_USER_AGENT)),
            timeout_seconds=int(d.get("timeout_seconds", 10)),
            mock_pages=pages,
        )


@dataclass
class GenerateConfig:
    min_occurrences: int = 20
    distinct_values: bool = True  # drop fields whose examples are all the same
    labeler: LabelerConfig = field(default_factory=LabelerConfig)
    fetcher: FetcherConfig = field(default_factory=FetcherConfig)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GenerateConfig":
        try:
            min_occ = int(d.get("min_occurrences", 20))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"min_occurrences must be an integer: {e}") from e
        if min_occ <= 0:
            raise ConfigError("min_occurrences must be positive.")

        return cls(
            min_occurrences=min_occ,
            distinct_values=bool(d.get("distinct_values", True)),
            labeler=LabelerConfig.from_dict(d.get("labeler")),
            fetcher=FetcherConfig.from_dict(d.get("fetcher")),
        )


def load_generate_config(path: Union[str, Path]) -> GenerateConfig:
    """
    Read a GenerateConfig from a YAML file.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level.")

    logger.info("Loaded generate config from %s", path)
    return GenerateConfig.from_dict(raw)


def generate_config_from_profile(profile_name: str) -> GenerateConfig:
    if profile_name not in GENERATE_PROFILES:
        raise ConfigError(
            f"Unknown profile {profile_name!r}. Available: {sorted(GENERATE_PROFILES)}"
        )
    return GenerateConfig.from_dict(GENERATE_PROFILES[profile_name])
