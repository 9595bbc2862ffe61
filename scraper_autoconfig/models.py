# scraper_autoconfig/models.py

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from .config_behavior import CLASS_ESCAPE_CHARS, STRIP_SKIP_TRAILING_NODES
from .utils import levenshtein, sorted_intersection

_NTH_CHILD_RE = re.compile(r"^nth-child\((\d+)\)$")


@dataclass(eq=False)
class Node:
    """
    One element of an HTML tree as seen from a field's point of view:
    its tag, its classes and its pseudo classes (currently only nth-child).
    """

    tag_name: str
    classes: List[str] = field(default_factory=list)
    pseudo_classes: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        parts = [self.tag_name]
        for cl in self.classes:
            parts.append("." + _escape_class(cl))
        for pcl in self.pseudo_classes:
            parts.append(":" + pcl)
        return "".join(parts)

    def __eq__(self, other: object) -> bool:
        # class and pseudo class order does not matter
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.tag_name == other.tag_name
            and sorted(self.classes) == sorted(other.classes)
            and sorted(self.pseudo_classes) == sorted(other.pseudo_classes)
        )

    __hash__ = None  # mutable

    def copy(self) -> "Node":
        return Node(
            tag_name=self.tag_name,
            classes=list(self.classes),
            pseudo_classes=list(self.pseudo_classes),
        )


def _escape_class(cl: str) -> str:
    for ch in CLASS_ESCAPE_CHARS:
        cl = cl.replace(ch, "\\" + ch)
    # https://www.w3.org/International/questions/qa-escapes#cssescapes
    if cl and cl[0].isdigit():
        cl = f"\\3{cl[0]} {cl[1:]}"
    return cl


# --- Path helpers ----------------------------------------------------------
# A path is a plain list of nodes from <body> down to the element that holds a value.

def path_string(path: Sequence[Node]) -> str:
    return " > ".join(str(n) for n in path)


def path_distance(a: Sequence[Node], b: Sequence[Node]) -> int:
    return levenshtein(path_string(a), path_string(b))


def copy_path(path: Sequence[Node]) -> List[Node]:
    """
    Deep copy of a path. Candidates must never share node objects because
    stripping and merging mutate nodes in place.
    """
    return [n.copy() for n in path]


def trim_prefix(path: Sequence[Node], min_classes: int) -> List[Node]:
    """
    Shortest suffix of `path` whose nodes together have at least `min_classes`
    classes. If that is never reached the whole path is returned.
    """
    n_classes = 0
    for i in range(len(path) - 1, -1, -1):
        n_classes += len(path[i].classes)
        if n_classes >= min_classes:
            return list(path[i:])
    return list(path)


def nth_child_index(pseudo_class: str) -> Optional[int]:
    m = _NTH_CHILD_RE.match(pseudo_class)
    return int(m.group(1)) if m else None


# --- Field candidates ------------------------------------------------------

@dataclass
class FieldExample:
    value: str
    emission_index: int


@dataclass
class FieldCandidate:
    """
    A field candidate: a value location on the page (path + attribute or text
    position) together with all the example values found there.

    Starts out as one atomic text node / attribute value and grows into a
    generalized group when repeated occurrences get squashed into it.
    """

    # 1. Location
    path: List[Node]
    attr: str = ""           # empty means text content
    text_index: int = 0      # position among the parent's children (text only)

    # 2. Occurrences
    count: int = 1
    examples: List[FieldExample] = field(default_factory=list)
    emission_index: int = 0  # smallest emission index of all merged candidates

    # 3. Squash bookkeeping
    strip_index: int = 0

    # 4. Presentation
    name: str = ""
    color: Tuple[int, int, int] = (0, 0, 0)
    distance: float = 0.0
    selected: bool = False

    def example_values(self) -> List[str]:
        return [ex.value for ex in self.examples]

    def describe(self) -> str:
        return (
            f"path: {path_string(self.path)}, attr: {self.attr!r}, "
            f"text_index: {self.text_index}, count: {self.count}, "
            f"examples: {self.example_values()}, name: {self.name!r}, "
            f"strip_index: {self.strip_index}, emission_index: {self.emission_index}"
        )

    def strip_nth_child(self, min_occ: int) -> None:
        """
        Clear nth-child pseudo classes that most likely encode an item position
        rather than structure, so that repeated items end up with comparable paths.

        Walking up from the second-to-last node, the first node with nth-child(x)
        where x >= min_occ is cleared and becomes the strip index. Every node above
        it is cleared as well. The last node keeps its pseudo class.
        """
        strip_index: Optional[int] = None
        for i in range(len(self.path) - 1 - STRIP_SKIP_TRAILING_NODES, -1, -1):
            node = self.path[i]
            if strip_index is not None:
                node.pseudo_classes = []
                continue
            if not node.pseudo_classes:
                continue
            idx = nth_child_index(node.pseudo_classes[0])
            if idx is not None and idx >= min_occ:
                node.pseudo_classes = []
                strip_index = i
        if strip_index is not None:
            self.strip_index = strip_index

    def absorb(self, other: "FieldCandidate") -> bool:
        """
        Merge `other` into this group if both describe the same logical field.

        Returns True (and updates path, count, examples, emission_index) on a match.
        """
        if self.text_index != other.text_index or self.attr != other.attr:
            return False
        if len(self.path) != len(other.path):
            return False

        new_path: List[Node] = []
        for i, (mine, theirs) in enumerate(zip(self.path, other.path)):
            if mine.tag_name != theirs.tag_name:
                return False

            # below the strip index nth-child still carries structure
            if i > self.strip_index and mine.pseudo_classes != theirs.pseudo_classes:
                return False

            if not mine.classes and not theirs.classes:
                shared: List[str] = []
            else:
                shared = sorted_intersection(mine.classes, theirs.classes)
                if not shared:
                    return False

            new_path.append(
                Node(
                    tag_name=mine.tag_name,
                    classes=shared,
                    pseudo_classes=list(mine.pseudo_classes),
                )
            )

        self.path = new_path
        self.count += other.count
        self.examples.extend(other.examples)
        self.emission_index = min(self.emission_index, other.emission_index)
        return True
