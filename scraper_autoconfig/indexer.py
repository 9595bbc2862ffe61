# scraper_autoconfig/indexer.py

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Dict, List, Optional, Sequence, Tuple
from bs4 import BeautifulSoup
from .config_behavior import ALLOWED_ATTRS, EMITTING_VOID_TAGS, HTML_TREE_BUILDER, VOID_TAGS
from .models import FieldCandidate, FieldExample, Node, copy_path

logger = logging.getLogger(__name__)


@dataclass
class _Level:
    """
    Bookkeeping for the children of one open element.
    """
    n_children: int = 0                                 # text, comment and element children
    siblings: List[Node] = field(default_factory=list)  # element children, for nth-child


class _PathIndexer(HTMLParser):
    """
    Token walk over the <body> of a normalized HTML document.

    Every non-empty text node and every allow-listed attribute value becomes one
    FieldCandidate tagged with the path of nodes leading to it.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.candidates: List[FieldCandidate] = []
        self._stack: List[Node] = []
        self._levels: List[_Level] = [_Level()]
        self._in_body = False
        self._done = False
        self._emitted = 0

    # -------- helpers ----------------------------------------------------

    def _active(self) -> bool:
        return self._in_body and not self._done

    def _emit(self, path: List[Node], value: str, attr: str = "", text_index: int = 0) -> None:
        self.candidates.append(
            FieldCandidate(
                path=path,
                attr=attr,
                text_index=text_index,
                count=1,
                examples=[FieldExample(value=value, emission_index=self._emitted)],
                emission_index=self._emitted,
            )
        )
        self._emitted += 1

    def _tag_metadata(
        self, tag: str, attrs: Sequence[Tuple[str, Optional[str]]]
    ) -> Tuple[Dict[str, str], List[str], List[str]]:
        """
        Allow-listed attribute values, classes and pseudo classes of a start tag.
        """
        attr_values: Dict[str, str] = {}
        classes: List[str] = []

        # classes of <body> are irrelevant for selectors
        if tag != "body":
            allowed = ALLOWED_ATTRS.get(tag, frozenset())
            for key, value in attrs:
                value = (value or "").strip()
                if key == "class" and value:
                    # classes containing dots can't be used in a selector as-is
                    classes = [cl for cl in value.split() if "." not in cl]
                if key in allowed:
                    attr_values[key] = value

        pseudo_classes: List[str] = []
        siblings = self._levels[-1].siblings
        if any(s.tag_name == tag for s in siblings):
            pseudo_classes = [f"nth-child({len(siblings) + 1})"]

        return attr_values, classes, pseudo_classes

    def _void_tag(self, tag: str, attrs: Sequence[Tuple[str, Optional[str]]]) -> None:
        attr_values, classes, pseudo_classes = self._tag_metadata(tag, attrs)
        level = self._levels[-1]
        level.n_children += 1
        level.siblings.append(Node(tag_name=tag, classes=list(classes)))

        if tag not in EMITTING_VOID_TAGS or not attr_values:
            return

        terminal = Node(tag_name=tag, classes=classes, pseudo_classes=pseudo_classes)
        for key, value in attr_values.items():
            self._emit(copy_path(self._stack + [terminal]), value, attr=key)

    # -------- HTMLParser callbacks ---------------------------------------

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if self._done:
            return
        if tag == "body":
            self._in_body = True
        if not self._in_body:
            return

        if tag in VOID_TAGS:
            self._void_tag(tag, attrs)
            return

        attr_values, classes, pseudo_classes = self._tag_metadata(tag, attrs)
        level = self._levels[-1]
        level.n_children += 1
        level.siblings.append(Node(tag_name=tag, classes=list(classes)))

        self._stack.append(Node(tag_name=tag, classes=classes, pseudo_classes=pseudo_classes))
        self._levels.append(_Level())

        for key, value in attr_values.items():
            self._emit(copy_path(self._stack), value, attr=key)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if not self._active():
            return
        if tag in VOID_TAGS:
            self._void_tag(tag, attrs)
            return
        self.handle_starttag(tag, attrs)
        self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        if not self._active() or tag in VOID_TAGS:
            return

        if not any(n.tag_name == tag for n in self._stack):
            logger.debug("Ignoring stray end tag </%s>", tag)
            return

        while self._stack:
            node = self._stack.pop()
            self._levels.pop()
            if node.tag_name == tag:
                break

        if tag == "body":
            self._done = True

    def handle_data(self, data: str) -> None:
        if not self._active():
            return
        level = self._levels[-1]
        text = data.strip()
        if text:
            self._emit(copy_path(self._stack), text, text_index=level.n_children)
        level.n_children += 1

    def handle_comment(self, data: str) -> None:
        if self._active():
            self._levels[-1].n_children += 1


def normalize_html(html: str) -> str:
    """
    Let a tolerant parser fix up the markup (implicit html/body/tbody, unclosed
    tags, self-closing void elements) so that the generated selectors match the
    tree a browser or scraper will see later.
    """
    soup = BeautifulSoup(html or "", HTML_TREE_BUILDER)
    return str(soup)


def extract_candidates(html: str, normalize: bool = True) -> List[FieldCandidate]:
    """
    Walk the body of `html` and return one FieldCandidate per non-empty text node
    and per allow-listed attribute, in document order.

    Never raises on malformed HTML; whatever the tokenizer recovers is indexed.
    """
    if normalize:
        html = normalize_html(html)

    indexer = _PathIndexer()
    indexer.feed(html or "")
    indexer.close()

    logger.debug("Indexed %d field candidate(s)", len(indexer.candidates))
    return indexer.candidates
