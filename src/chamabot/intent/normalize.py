"""Text normalization for deterministic intent matching."""

from __future__ import annotations

import re

_MULTISPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Normalize user text for keyword matching.

    Normalization is intentionally conservative:
        - Strip surrounding whitespace.
        - Lowercase.
        - Collapse inner whitespace runs to a single space.

    Punctuation is kept: commas separate registration fields and `?` is a command on its own.
    """

    value = (text or "").strip().lower()
    value = _MULTISPACE_RE.sub(" ", value)
    return value
