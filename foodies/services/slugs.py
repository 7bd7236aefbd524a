"""
Foodies Backend — Slug Generator
==================================

What:  Turns a meal title into the URL-safe identifier used in /meals/{slug}.
How:   NFKD-normalize → drop non-ASCII marks → lowercase → keep word chars,
       spaces and hyphens → collapse separators into single hyphens.

Examples:
    "Big Burger"            → "big-burger"
    "  Crème Brûlée!! "     → "creme-brulee"
    "Mac & Cheese"          → "mac-cheese"
    "snake_case__title"     → "snake-case-title"

The function is pure: the same title always yields the same slug, which is
what makes the slug usable as a unique key.
"""

import re
import unicodedata

_UNSAFE = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(title: str) -> str:
    """
    Lowercase, hyphen-separated, ASCII-only slug for `title`.

    Returns an empty string when the title has no usable characters
    (e.g. "!!!" or "🍔"); the caller decides whether that is acceptable.
    """
    normalized = unicodedata.normalize("NFKD", title or "")
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    cleaned = _UNSAFE.sub("", ascii_only.lower())
    return _SEPARATORS.sub("-", cleaned).strip("-")
