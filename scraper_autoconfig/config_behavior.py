# scraper_autoconfig/config_behavior.py
"""
Central tunables for scraper_autoconfig. This file contains the lists, limits and
heuristics used by the indexer, the field manager and the config synthesizer.

Config is organized into three sections:
1. INDEXER CONFIG     -> which tags/attributes produce field candidates
2. FIELD MANAGER CONFIG -> squashing, filtering and colouring
3. SYNTHESIS CONFIG   -> how the final scraper config is written
"""

from __future__ import annotations
from typing import Dict, FrozenSet, Tuple


# ======================================================================
# ============================ INDEXER CONFIG ===========================
# ======================================================================

# Attributes whose values become field candidates, per tag name
ALLOWED_ATTRS: Dict[str, FrozenSet[str]] = {
    "a": frozenset({"href"}),
    "img": frozenset({"src"}),
}

# Void tags that may carry an allow-listed attribute and are emitted against a
# synthetic terminal node
EMITTING_VOID_TAGS: FrozenSet[str] = frozenset({"br", "input", "img", "link"})

# All HTML void elements (never pushed onto the path stack)
VOID_TAGS: FrozenSet[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Characters inside class names that need a backslash escape in a selector
CLASS_ESCAPE_CHARS: Tuple[str, ...] = (":", ">", "[", "]", "/", "!", "%")

# Tree builder used to normalize the page before indexing (HTML5 tree construction,
# so implicit tags such as tbody are inserted the way browsers insert them)
HTML_TREE_BUILDER: str = "html5lib"


# ======================================================================
# ========================= FIELD MANAGER CONFIG ========================
# ======================================================================

# Number of trailing path nodes whose nth-child is never stripped
STRIP_SKIP_TRAILING_NODES: int = 1

# Colour wheel parameters for the field table
COLOR_SATURATION: float = 0.73
COLOR_VALUE: float = 0.96
COLOR_DISTANCE_SCALE: float = 1.2


# ======================================================================
# =========================== SYNTHESIS CONFIG ==========================
# ======================================================================

# Labels starting with this prefix are parts of the composite date field
DATE_COMPONENT_PREFIX: str = "date-component"

# Attributes whose fields are typed as links
URL_ATTRS: FrozenSet[str] = frozenset({"href", "src"})

# Minimum number of classes kept in the item selector
ITEM_SELECTOR_MIN_CLASSES: int = 3

# Number of examples attached to each element location as a hint
MAX_LOCATION_EXAMPLES: int = 4

# Interactive table
TABLE_MAX_EXAMPLES: int = 4
TABLE_EXAMPLE_WIDTH: int = 40
