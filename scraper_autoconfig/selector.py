# scraper_autoconfig/selector.py
"""
Terminal selection of the field groups that go into the generated config.
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple, TypedDict
from .config_behavior import TABLE_EXAMPLE_WIDTH, TABLE_MAX_EXAMPLES
from .models import FieldCandidate
from .utils import shorten_string

logger = logging.getLogger(__name__)

ANSI_RESET = "\x1b[0m"


class Row(TypedDict):
    name: str
    examples: List[str]
    color: Tuple[int, int, int]


def _colored(text: str, color: Tuple[int, int, int]) -> str:
    r, g, b = color
    return f"\x1b[38;2;{r};{g};{b}m{text}{ANSI_RESET}"


def format_row(index: int, row: Row) -> str:
    examples = [shorten_string(ex, TABLE_EXAMPLE_WIDTH) for ex in row["examples"][:TABLE_MAX_EXAMPLES]]
    return f"[{index}] {row['name']}: " + _colored(" | ".join(examples), row["color"])


def parse_selection(text: str, n_rows: int) -> Set[int]:
    """
    Parse "0,2,5-7" or "all" into a set of row indices.
    Raises ValueError on malformed or out-of-range input.
    """
    text = text.strip().lower()
    if text == "all":
        return set(range(n_rows))

    selected: Set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            lo_s, hi_s = part.split("-", 1)
            lo, hi = int(lo_s), int(hi_s)
            if lo > hi:
                raise ValueError(f"invalid range {part!r}")
            indices = range(lo, hi + 1)
        else:
            indices = range(int(part), int(part) + 1)

        for i in indices:
            if not 0 <= i < n_rows:
                raise ValueError(f"index {i} out of range 0-{n_rows - 1}")
            selected.add(i)
    return selected


def select_indices(
    rows: Sequence[Row],
    prompt: Optional[Callable[[str], str]] = None,
    echo: Optional[Callable[[str], None]] = None,
) -> Set[int]:
    """
    Show one line per row and ask for a selection until it parses.
    An empty answer selects nothing. Defaults to stdin/stdout.
    """
    prompt = prompt or input
    echo = echo or print
    for i, row in enumerate(rows):
        echo(format_row(i, row))

    while True:
        answer = prompt("Select fields (e.g. 0,2,4-6 or 'all'): ")
        try:
            return parse_selection(answer, len(rows))
        except ValueError as e:
            echo(f"Invalid selection: {e}")


def select_fields(groups: Sequence[FieldCandidate], interactive: bool) -> List[FieldCandidate]:
    """
    Mark the chosen groups as selected and return them in order. Without
    `interactive` every group is taken.
    """
    if interactive:
        rows: List[Row] = [
            {"name": g.name, "examples": g.example_values(), "color": g.color} for g in groups
        ]
        chosen = select_indices(rows)
    else:
        chosen = set(range(len(groups)))

    for i, g in enumerate(groups):
        g.selected = i in chosen

    logger.info("Selected %d of %d field(s)", len(chosen), len(groups))
    return [g for g in groups if g.selected]
