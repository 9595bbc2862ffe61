# scraper_autoconfig/dates.py

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Mapping, Optional, Sequence, Tuple
from .date_names import LONG_DAY_NAMES, LONG_MONTH_NAMES, SHORT_DAY_NAMES, SHORT_MONTH_NAMES
from .utils import contains_digits, most_common, only_digits

logger = logging.getLogger(__name__)

UNKNOWN_FORMAT = "unknown format. please specify manually"

# Single characters that split a date string into tokens
DATE_SEPARATORS = frozenset(" ,.-:")


@dataclass
class CoveredDateParts:
    """
    Which parts of a date a single date component covers.
    """
    day: bool = False
    month: bool = False
    year: bool = False
    time: bool = False

    def any(self) -> bool:
        return self.day or self.month or self.year or self.time


def _tokenize(date: str) -> Tuple[List[str], List[str]]:
    """
    Split `date` into tokens and the separator following each token. Two
    consecutive separators yield an empty token between them.
    """
    tokens: List[str] = []
    separators: List[str] = []
    current = ""
    for c in date:
        if c in DATE_SEPARATORS:
            tokens.append(current)
            separators.append(c)
            current = ""
        else:
            current += c
    if current:
        tokens.append(current)
    if len(separators) < len(tokens):
        separators.append("")
    return tokens, separators


def _lookup(word: str, tables: Mapping[str, FrozenSet[str]]) -> List[str]:
    w = word.lower()
    return [lang for lang, names in tables.items() if w in names]


def _month_name_layout(token: str) -> Optional[Tuple[str, List[str]]]:
    langs = _lookup(token, LONG_MONTH_NAMES)
    if langs:
        return "January", langs
    langs = _lookup(token, SHORT_MONTH_NAMES)
    if langs:
        return "Jan", langs
    return None


def _day_name_layout(token: str) -> Optional[Tuple[str, List[str]]]:
    langs = _lookup(token, LONG_DAY_NAMES)
    if langs:
        return "Monday", langs
    langs = _lookup(token, SHORT_DAY_NAMES)
    if langs:
        return "Mon", langs
    return None


def _is_day_or_month_number(token: str) -> bool:
    return len(token) <= 2 and only_digits(token)


def _year_layout(token: str) -> Optional[str]:
    if len(token) == 4:
        return "2006"
    if len(token) == 2:
        return "06"
    return None


def _time_layout(index: int, tokens: Sequence[str], separators: Sequence[str]) -> Optional[str]:
    token = tokens[index]
    if len(token) <= 2:
        if separators[index] in (":", "."):
            return "15"
        if index > 0 and separators[index - 1] in (":", "."):
            # could also be seconds, not encountered so far
            return "04"
        if index + 1 < len(tokens) and tokens[index + 1] == "Uhr":
            return "15"
        return None

    # one of 04h, 15u04, 15h04, 04pm, 15pm
    if token.endswith("h"):
        return "04h"
    if token.lower().endswith(("am", "pm")):
        suffix = "PM" if token[-2:] in ("AM", "PM") else "pm"
        if index > 0 and separators[index - 1] != " ":
            return "04" + suffix
        return "15" + suffix
    if "u" in token:
        return "15u04"
    if "h" in token:
        return "15h04"
    return None


def get_date_format(date: str, parts: CoveredDateParts) -> Tuple[str, str]:
    """
    Infer a Go-style date layout (e.g. "Mon. 2. Jan. 2006") and the language of
    the named parts from a single date string.

    Recognised parts are replaced by layout tokens, everything else (separators,
    literals like "Uhr", "om", "ab") is kept verbatim. Returns
    (UNKNOWN_FORMAT, "") when nothing could be recognised.
    """
    if not date or not parts.any():
        return UNKNOWN_FORMAT, ""

    day, month, year, time = parts.day, parts.month, parts.year, parts.time
    tokens, separators = _tokenize(date)

    pot_langs: List[List[str]] = []
    layout_tokens: List[str] = []
    n_recognised = 0

    for i, token in enumerate(tokens):
        if token == "":
            layout_tokens.append(token)
            continue

        replacement: Optional[str] = None
        if not contains_digits(token):
            if month:
                found = _month_name_layout(token)
                if found:
                    replacement, langs = found
                    pot_langs.append(langs)
                    month = False
            if replacement is None and day:
                found = _day_name_layout(token)
                if found:
                    # day stays open: a date may hold a day name and a day number
                    replacement, langs = found
                    pot_langs.append(langs)
        else:
            if day and _is_day_or_month_number(token):
                replacement = "2"
                day = False
            elif month and _is_day_or_month_number(token):
                replacement = "1"
                month = False
            elif year and _year_layout(token):
                replacement = _year_layout(token)
                year = False
            elif time:
                replacement = _time_layout(i, tokens, separators)

        if replacement is None:
            layout_tokens.append(token)
        else:
            layout_tokens.append(replacement)
            n_recognised += 1

    if n_recognised == 0:
        return UNKNOWN_FORMAT, ""

    layout = "".join(t + s for t, s in zip(layout_tokens, separators))

    language = ""
    if len(pot_langs) > 1:
        shared = set(pot_langs[0])
        for langs in pot_langs[1:]:
            shared &= set(langs)
        if shared:
            language = sorted(shared)[0]
    elif pot_langs:
        language = pot_langs[0][0]

    return layout, language


def get_date_format_multi(dates: Sequence[str], parts: CoveredDateParts) -> Tuple[str, str]:
    """
    Layout and language that most of the given examples agree on.
    """
    if not dates:
        return UNKNOWN_FORMAT, ""

    results = [get_date_format(d, parts) for d in dates]
    layout = most_common([layout for layout, _ in results])
    languages = [lang for _, lang in results if lang]
    language = most_common(languages) if languages else ""

    if layout == UNKNOWN_FORMAT:
        logger.warning("Could not infer a date layout from examples %s", list(dates)[:4])
    return layout, language
