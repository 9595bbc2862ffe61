#!/usr/bin/env python
"""
Command-line runner: analyze one page and write a scraper config for it.

Usage examples:

    # Default profile, print the config
    python -m scraper_autoconfig.run_generate --url https://example.com/events --stdout

    # Page with only a handful of items, pick fields interactively
    python -m scraper_autoconfig.run_generate --url https://example.com/events \
        --profile small-list --interactive --output configs/events.yml

    # Generate config file (labeler, fetcher, mock pages, ...)
    python -m scraper_autoconfig.run_generate --url https://example.com/events \
        --config generate.yml --min-occurrences 6
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from scraper_autoconfig.config import (
    ConfigError,
    GenerateConfig,
    generate_config_from_profile,
    load_generate_config,
)
from scraper_autoconfig.config_runtime_profiles import GENERATE_PROFILES
from scraper_autoconfig.fetcher import FetchError
from scraper_autoconfig.generate import generate_config
from scraper_autoconfig.labeler import LabelerError
from scraper_autoconfig.synthesize import GenerateError
from scraper_autoconfig.writer import dump_scraper_config, write_scraper_config

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "config.yml"


def parse_args(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Generation settings come from a profile (--profile, default "default") or a
    YAML file (--config); the remaining flags override them.
    """
    parser = argparse.ArgumentParser(
        description="Generate a scraper config by detecting repeated items on a web page."
    )

    parser.add_argument("--url", type=str, required=True, help="URL of the page to analyze.")

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--profile",
        choices=sorted(GENERATE_PROFILES.keys()),
        default=None,
        help="Name of the generate profile to use (defined in config_runtime_profiles.py).",
    )
    group.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML generate config (min_occurrences, labeler, fetcher).",
    )

    parser.add_argument(
        "--min-occurrences",
        type=int,
        default=None,
        help="Optional override: minimum number of repetitions for a field.",
    )

    parser.add_argument(
        "--distinct-values",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Optional override: drop fields whose examples are all identical.",
    )

    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Choose the fields to include instead of taking all of them.",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated config instead of writing a file.",
    )

    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output YAML file path. Default: {DEFAULT_OUTPUT}.",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO.",
    )

    return parser.parse_args(argv)


def build_generate_config(args: argparse.Namespace) -> GenerateConfig:
    """
    Profile or file first, then CLI overrides.
    """
    if args.config:
        config = load_generate_config(args.config)
    else:
        config = generate_config_from_profile(args.profile or "default")

    if args.min_occurrences is not None:
        if args.min_occurrences <= 0:
            raise ConfigError("--min-occurrences must be positive.")
        config.min_occurrences = args.min_occurrences
    if args.distinct_values is not None:
        config.distinct_values = args.distinct_values

    logger.info(
        "Generate config: min_occurrences=%d, distinct_values=%s, labeler=%s, fetcher=%s",
        config.min_occurrences,
        config.distinct_values,
        config.labeler.labeler_type,
        config.fetcher.fetcher_type,
    )
    return config


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    try:
        config = build_generate_config(args)
        scraper_config = generate_config(args.url, config, interactive=args.interactive)
    except (ConfigError, GenerateError, LabelerError, FetchError) as e:
        logger.error("%s", e)
        return 1

    if args.stdout:
        print(dump_scraper_config(scraper_config), end="")
        return 0

    output_file = write_scraper_config(scraper_config, Path(args.output))
    logger.info(
        "Wrote config with %d field(s) to %s",
        len(scraper_config.fields),
        output_file,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
