# scraper_autoconfig/writer.py

from __future__ import annotations
import re
import sys
from pathlib import Path
from typing import Any, Union
import yaml
from .scraper_config import ScraperConfig

EXAMPLES_KEY = "examples"

# only the key at the start of a line, never text inside a scalar value
_EXAMPLES_LINE_RE = re.compile(rf"^(\s*){EXAMPLES_KEY}: \[", re.MULTILINE)


class _FlowList(list):
    pass


class _ConfigDumper(yaml.SafeDumper):
    pass


def _represent_flow_list(dumper: yaml.SafeDumper, data: _FlowList) -> yaml.SequenceNode:
    node = dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)
    # keep multi-line values on one line so the whole list can be commented out
    for item in node.value:
        if isinstance(item, yaml.ScalarNode) and ("\n" in item.value or "\r" in item.value):
            item.style = '"'
    return node


_ConfigDumper.add_representer(_FlowList, _represent_flow_list)


def _mark_examples(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: _FlowList(v) if k == EXAMPLES_KEY and isinstance(v, list) else _mark_examples(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_mark_examples(v) for v in obj]
    return obj


def dump_scraper_config(config: ScraperConfig) -> str:
    """
    Serialize a ScraperConfig as YAML under a top-level `scrapers` list.

    Example values are kept as comments (`# examples: [...]`) so the user sees
    what a selector matched without them becoming part of the config.
    """
    data = _mark_examples({"scrapers": [config.to_serializable_dict()]})
    out = yaml.dump(
        data,
        Dumper=_ConfigDumper,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=sys.maxsize,
    )
    return _EXAMPLES_LINE_RE.sub(rf"\1# {EXAMPLES_KEY}: [", out)


def write_scraper_config(
    config: ScraperConfig,
    output_path: Union[str, Path],
) -> Path:
    """
    Write the YAML of `config` to `output_path`, creating parent directories.

    Returns:
        Path to the written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(dump_scraper_config(config))

    return output_path
