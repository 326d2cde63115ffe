from __future__ import annotations

import re
import unicodedata
from typing import Iterable, List

# NOTE: Skill keys produced here are what the scorer compares and what the
# breakdown reports, so matching, requirements extraction and explanations
# should all go through this module.

_SKILL_STRIP_RE = re.compile(r"[^a-z0-9+#]")


def normalize_text(text: str) -> str:
    """
    Deterministic normalization for downstream pattern matching.

    Goals:
    - stable across platforms
    - remove unicode quirks (smart quotes, non-breaking spaces)
    - collapse whitespace
    """
    if not text:
        return ""
    t = unicodedata.normalize("NFKC", text)
    t = t.replace("\u00a0", " ")
    # Normalize common unicode dashes to '-'
    t = re.sub(r"[\u2010-\u2015]", "-", t)
    t = " ".join(t.split())
    return t


def normalize_skill(skill: str) -> str:
    """
    "Node.js" -> "nodejs", " C++ " -> "c++", "C#" -> "c#".
    """
    return _SKILL_STRIP_RE.sub("", (skill or "").strip().lower())


def normalize_skills(items: Iterable[str]) -> List[str]:
    """Normalized skill keys, first-seen order, deduped, empties dropped."""
    out: List[str] = []
    seen = set()
    for it in items or []:
        key = normalize_skill(it)
        if key and key not in seen:
            out.append(key)
            seen.add(key)
    return out
