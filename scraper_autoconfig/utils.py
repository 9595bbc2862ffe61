# scraper_autoconfig/utils.py

from __future__ import annotations
import colorsys
from collections import Counter
from typing import Hashable, Iterable, List, Sequence, Tuple, TypeVar
from rapidfuzz.distance import Levenshtein

T = TypeVar("T", bound=Hashable)


def levenshtein(a: str, b: str) -> int:
    return Levenshtein.distance(a, b)


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[int, int, int]:
    """
    Convert HSV (each in [0, 1]) to an RGB triple in [0, 255]
    """
    r, g, b = colorsys.hsv_to_rgb(h, s, v)
    return int(r * 255), int(g * 255), int(b * 255)


def shorten_string(s: str, length: int) -> str:
    if length and len(s) > length:
        return f"{s[:length]}..."
    return s


def most_common(items: Sequence[T]) -> T:
    """
    Most frequent item; on ties the one seen first wins.
    """
    counts = Counter(items)
    best = items[0]
    for item in items:
        if counts[item] > counts[best]:
            best = item
    return best


def sorted_intersection(a: Iterable[str], b: Iterable[str]) -> List[str]:
    return sorted(set(a) & set(b))


def contains_digits(s: str) -> bool:
    return any("0" <= c <= "9" for c in s)


def only_digits(s: str) -> bool:
    return all("0" <= c <= "9" for c in s)
