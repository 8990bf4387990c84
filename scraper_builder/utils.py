"""Utility helpers for name normalization and output trimming."""

from __future__ import annotations

import re

UNSAFE_NAME_PATTERN = re.compile(r"[^a-zA-Z0-9_-]")


def normalize_scraper_name(value: str) -> str:
    """Map a caller-supplied name onto its canonical on-disk identity.

    Every character outside ``[a-zA-Z0-9_-]`` becomes ``_`` (one per
    character, no collapsing) and the result is lower-cased, so applying
    the function twice is a no-op.
    """
    return UNSAFE_NAME_PATTERN.sub("_", value).lower()


def truncate(text: str, limit: int, marker: str = "...") -> str:
    """Cut ``text`` to ``limit`` characters, appending ``marker`` if cut."""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + marker
