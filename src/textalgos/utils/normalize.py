"""Normalization helpers for comparing scraped labels."""

from __future__ import annotations

import re
import unicodedata


_SEPARATORS_TO_SPACE = str.maketrans({"-": " ", "/": " ", "_": " ", ".": None, ",": None, "'": None})
# Characters NFD leaves alone (ø) or that scraped sources mangle before folding.
_MANUAL_FOLDS = str.maketrans({"ø": "o", "ó": "o", "è": "e", "é": "e", "í": "i", "ç": "c", "â": "a"})
_WHITESPACE_RE = re.compile(r"\s+")


def clean(value: str) -> str:
    """Canonicalize text for soft matching (lowercase, no separators, no diacritics)."""
    cleaned = value.lower().translate(_SEPARATORS_TO_SPACE)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    cleaned = fold_diacritics(cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def fold_diacritics(value: str) -> str:
    """Replace accented letters by their base letter."""
    decomposed = unicodedata.normalize("NFD", value.translate(_MANUAL_FOLDS))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)
