# scraper_autoconfig/fieldmanager.py

from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional, Tuple
from .config_behavior import COLOR_DISTANCE_SCALE, COLOR_SATURATION, COLOR_VALUE
from .indexer import extract_candidates
from .models import FieldCandidate, path_distance, path_string
from .utils import hsv_to_rgb

logger = logging.getLogger(__name__)


def _canonical_key(fc: FieldCandidate) -> Tuple:
    # selected, color & distance are presentation only and ignored here
    return (
        path_string(fc.path),
        fc.attr,
        fc.text_index,
        fc.count,
        tuple(sorted(fc.example_values())),
        fc.name,
        fc.strip_index,
    )


class FieldManager:
    """
    Ordered collection of field candidates for one page.

    Lifecycle:
      from_html()  -> one candidate per text node / attribute
      squash()     -> repeated candidates merged into groups
      filter()     -> rare or static groups dropped
      set_colors() -> display colours by path distance
      (labeling & selection happen outside, on the same candidate objects)
    """

    def __init__(self, candidates: Optional[Iterable[FieldCandidate]] = None) -> None:
        self.candidates: List[FieldCandidate] = list(candidates or [])

    @classmethod
    def from_html(cls, html: str, normalize: bool = True) -> "FieldManager":
        return cls(extract_candidates(html, normalize=normalize))

    # -------- container protocol ----------------------------------------

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[FieldCandidate]:
        return iter(self.candidates)

    def __getitem__(self, i: int) -> FieldCandidate:
        return self.candidates[i]

    def __eq__(self, other: object) -> bool:
        """
        Order-independent comparison of two managers.
        """
        if not isinstance(other, FieldManager):
            return NotImplemented
        if len(self) != len(other):
            return False
        mine = sorted(_canonical_key(fc) for fc in self.candidates)
        theirs = sorted(_canonical_key(fc) for fc in other.candidates)
        return mine == theirs

    __hash__ = None

    def describe(self) -> str:
        return "\n".join(fc.describe() for fc in self.candidates)

    # -------- pipeline stages --------------------------------------------

    def squash(self, min_occ: int) -> None:
        """
        Merge candidates that are repetitions of the same logical field.

        1. strip position-like nth-child pseudo classes from every path
        2. order by strip index so deep-context candidates form groups first
        3. merge, walking the ordered candidates from the back
        4. restore document order for groups and for their examples
        """
        for fc in self.candidates:
            fc.strip_nth_child(min_occ)

        ordered = sorted(self.candidates, key=lambda fc: fc.strip_index)

        squashed: List[FieldCandidate] = []
        for fc in reversed(ordered):
            if not any(group.absorb(fc) for group in squashed):
                squashed.append(fc)

        squashed.sort(key=lambda fc: fc.emission_index)
        for group in squashed:
            group.examples.sort(key=lambda ex: ex.emission_index)

        logger.info(
            "Squashed %d candidate(s) into %d group(s)",
            len(self.candidates),
            len(squashed),
        )
        self.candidates = squashed

    def filter(self, min_occ: int, distinct_values: bool) -> None:
        """
        Keep groups occurring at least `min_occ` times, truncated to `min_occ`
        examples. With `distinct_values`, groups whose kept examples are all the
        same (boilerplate such as "Read more") are dropped too.
        """
        kept: List[FieldCandidate] = []
        for fc in self.candidates:
            if fc.count < min_occ:
                continue

            fc.examples = fc.examples[:min_occ]

            if distinct_values and len({ex.value for ex in fc.examples}) <= 1:
                logger.debug("Dropping static field at %s", path_string(fc.path))
                continue

            kept.append(fc)

        logger.info("Kept %d of %d group(s) after filtering", len(kept), len(self.candidates))
        self.candidates = kept

    def set_colors(self) -> None:
        """
        Assign each group a colour derived from the accumulated path distance to
        its predecessors, so that structurally close fields look alike.
        """
        if not self.candidates:
            return

        self.candidates[0].distance = 0.0
        for prev, fc in zip(self.candidates, self.candidates[1:]):
            fc.distance = prev.distance + path_distance(prev.path, fc.path)

        max_distance = max(fc.distance for fc in self.candidates) * COLOR_DISTANCE_SCALE
        for fc in self.candidates:
            hue = fc.distance / max_distance if max_distance > 0 else 0.0
            fc.color = hsv_to_rgb(hue, COLOR_SATURATION, COLOR_VALUE)

    def process(self, min_occ: int, distinct_values: bool, labeler) -> None:
        """
        squash -> filter -> colours -> names
        """
        self.squash(min_occ)
        self.filter(min_occ, distinct_values)
        self.set_colors()
        labeler.label_fields(self.candidates)
