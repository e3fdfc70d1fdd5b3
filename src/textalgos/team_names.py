"""Fold youth and women's team markers into canonical suffixes."""

from __future__ import annotations

import re
from typing import Optional, Tuple

WOMEN_MARKER_RE = re.compile(r"(?:\s*\bwomen\b|\s*\([dw]\)|\s*\[w\])+\s*$", re.IGNORECASE)
YOUTH_CLASS_RE = re.compile(r"\s*\b[uo]-?(\d{2})\b\s*$", re.IGNORECASE)
YOUTH_PREFIX_RE = re.compile(r"^\s*(?:jong|jeugd|youth)\b\s*", re.IGNORECASE)
RESERVE_SUFFIX_RE = re.compile(r"\s+(?:b|reserves|ii)\s*$", re.IGNORECASE)

WOMEN_MARKER = "[w]"
RESERVE_MARKER = "ii"


def normalize_women_team(name: str) -> str:
    """Replace trailing women's markers (Women, (D), (W), [W]) with ``[w]``.

    >>> normalize_women_team("FC XX Women (W) [W]")
    'fc xx [w]'
    """
    folded = WOMEN_MARKER_RE.sub(f" {WOMEN_MARKER}", name, count=1)
    return folded.strip().lower()


def normalize_youth_team(name: str) -> Tuple[str, Optional[int]]:
    """Normalize youth/reserve designations.

    Numbered classes (U19, O21, U23) become ``" u<N>"`` and N is returned.
    Jong/Jeugd/Youth prefixes and B/Reserves suffixes become ``" ii"``.
    """
    numbered = YOUTH_CLASS_RE.search(name)
    if numbered:
        youth_class = int(numbered.group(1))
        base = name[: numbered.start()].strip().lower()
        return _join(base, f"u{youth_class}"), youth_class

    base, prefix_count = YOUTH_PREFIX_RE.subn("", name, count=1)
    base, suffix_count = RESERVE_SUFFIX_RE.subn("", base, count=1)
    if prefix_count or suffix_count:
        return _join(base.strip().lower(), RESERVE_MARKER), None

    return name.strip().lower(), None


def _join(base: str, marker: str) -> str:
    return f"{base} {marker}" if base else marker
