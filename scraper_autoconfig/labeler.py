# scraper_autoconfig/labeler.py
"""
Field naming strategies.

Every labeler exposes `label_fields(groups)` which sets `name` on each group in
place. Pick one with `new_labeler(LabelerConfig)`:

- basic:    field-0, field-1, ...
- local-ml: k-nearest-neighbour over simple lexical features of the examples
- remote:   POST the examples to an HTTP labeling service
"""

from __future__ import annotations
import csv
import logging
import string
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union
import numpy as np
import requests
from .config import LabelerConfig
from .models import FieldCandidate
from .utils import most_common

logger = logging.getLogger(__name__)

KNN_NEIGHBOURS = 2

# Column layout of the feature table: letter frequencies first, then these
NON_ALPHA_FEATURES = [
    "digit-count",
    "rune-count",
    "dict-words-count",
    "slash-count",
    "colon-count",
    "dash-count",
    "dot-count",
    "whitespace-count",
]
CLASS_COLUMN = "class"
FEATURE_COLUMNS = list(string.ascii_lowercase) + NON_ALPHA_FEATURES


class LabelerError(Exception):
    """Raised when a labeler can't be built or fails to label fields"""
    pass


# --- Features ----------------------------------------------------------------

def load_words(words_dir: Union[str, Path]) -> Set[str]:
    """
    Lower-cased words of every file below `words_dir`, one word per line.
    """
    words_dir = Path(words_dir)
    if not words_dir.is_dir():
        raise LabelerError(f"Words directory {words_dir} does not exist")

    words: Set[str] = set()
    for path in sorted(words_dir.rglob("*")):
        if not path.is_file():
            continue
        with path.open("r", encoding="utf-8", errors="replace") as f:
            for line in f:
                w = line.strip().lower()
                if w:
                    words.add(w)
    logger.debug("Loaded %d dictionary word(s) from %s", len(words), words_dir)
    return words


def calculate_features(value: str, words: Set[str]) -> List[int]:
    letters = [0] * 26
    for c in value.lower():
        if "a" <= c <= "z":
            letters[ord(c) - ord("a")] += 1

    return letters + [
        sum(1 for c in value if c.isdigit()),
        len(value),
        sum(1 for w in value.lower().split(" ") if w in words),
        value.count("/"),
        value.count(":"),
        value.count("-"),
        value.count("."),
        value.count(" "),
    ]


def write_feature_table(
    samples: Iterable[Tuple[str, str]],
    output_path: Union[str, Path],
    words: Set[str],
) -> Path:
    """
    Write (label, value) samples as a feature table that KnnLabeler can load.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    n = 0
    with output_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(FEATURE_COLUMNS + [CLASS_COLUMN])
        for label, value in samples:
            writer.writerow(calculate_features(value, words) + [label])
            n += 1

    logger.info("Wrote %d feature row(s) to %s", n, output_path)
    return output_path


def read_feature_table(path: Union[str, Path]) -> Tuple[np.ndarray, List[str]]:
    path = Path(path)
    rows: List[List[float]] = []
    labels: List[str] = []
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f, skipinitialspace=True)
            header = next(reader, None)
            if header is None or len(header) != len(FEATURE_COLUMNS) + 1:
                raise LabelerError(f"Unexpected header in feature table {path}")
            for line_no, row in enumerate(reader, start=2):
                if not row:
                    continue
                if len(row) != len(header):
                    raise LabelerError(f"{path}:{line_no}: expected {len(header)} columns")
                rows.append([float(v) for v in row[:-1]])
                labels.append(row[-1])
    except OSError as e:
        raise LabelerError(f"Could not read feature table {path}: {e}") from e
    except ValueError as e:
        raise LabelerError(f"Invalid value in feature table {path}: {e}") from e

    if not rows:
        raise LabelerError(f"Feature table {path} is empty")
    return np.array(rows, dtype=float), labels


# --- Labelers ----------------------------------------------------------------

class BasicLabeler:
    def label_fields(self, groups: Sequence[FieldCandidate]) -> None:
        for i, g in enumerate(groups):
            g.name = f"field-{i}"


class KnnLabeler:
    """
    Predicts a field name per example value and lets the examples of a group
    vote on the group's name.
    """

    def __init__(
        self,
        features: np.ndarray,
        labels: Sequence[str],
        words: Optional[Set[str]] = None,
        k: int = KNN_NEIGHBOURS,
    ) -> None:
        self.features = features
        self.labels = list(labels)
        self.words = words or set()
        self.k = k

    @classmethod
    def load(cls, model_name: str, words_dir: str = "") -> "KnnLabeler":
        table = Path(f"{model_name}.csv")
        if not table.is_file():
            raise LabelerError(f"Model file {table} not found")
        features, labels = read_feature_table(table)
        words = load_words(words_dir) if words_dir else set()
        logger.info("Loaded %d training row(s) from %s", len(labels), table)
        return cls(features, labels, words)

    def predict(self, value: str) -> str:
        vec = np.array(calculate_features(value, self.words), dtype=float)
        distances = np.linalg.norm(self.features - vec, axis=1)
        nearest = np.argsort(distances, kind="stable")[: self.k]
        # closest neighbour wins ties
        return most_common([self.labels[i] for i in nearest])

    def predict_label(self, values: Sequence[str]) -> str:
        if not values:
            raise LabelerError("Cannot predict a label without example values")
        return most_common([self.predict(v) for v in values])

    def label_fields(self, groups: Sequence[FieldCandidate]) -> None:
        for g in groups:
            g.name = self.predict_label(g.example_values())
            logger.debug("Labeled %s", g.name)


class RemoteLabeler:
    """
    Sends {"fields": [{"examples": [...]}, ...]} and expects {"labels": [...]}
    with one label per field, in order.
    """

    def __init__(self, url: str, timeout_seconds: int = 30) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.session = requests.Session()

    def label_fields(self, groups: Sequence[FieldCandidate]) -> None:
        if not groups:
            return

        payload = {"fields": [{"examples": g.example_values()} for g in groups]}
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout_seconds)
            resp.raise_for_status()
            body = resp.json()
        except requests.exceptions.RequestException as e:
            raise LabelerError(f"Labeling request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise LabelerError(f"Labeling service returned invalid JSON: {e}") from e

        labels = body.get("labels") if isinstance(body, dict) else None
        if not isinstance(labels, list) or len(labels) != len(groups):
            raise LabelerError(
                f"Labeling service returned {labels!r}, expected {len(groups)} label(s)"
            )

        for g, label in zip(groups, labels):
            g.name = str(label)
        logger.info("Labeled %d field(s) via %s", len(groups), self.url)


def new_labeler(config: LabelerConfig):
    if config.labeler_type == "basic":
        return BasicLabeler()
    if config.labeler_type == "local-ml":
        if not config.model_name:
            raise LabelerError("local-ml labeler requires a model_name")
        return KnnLabeler.load(config.model_name, config.words_dir)
    if config.labeler_type == "remote":
        if not config.remote_url:
            raise LabelerError("remote labeler requires a remote_url")
        return RemoteLabeler(config.remote_url, timeout_seconds=config.timeout_seconds)
    raise LabelerError(f"Unknown labeler type {config.labeler_type!r}")
