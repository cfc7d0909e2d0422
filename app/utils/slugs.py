"""
Slug helpers for human readable URLs.
"""

import re
import uuid

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ``text`` and join its alphanumeric runs with hyphens."""
    return _NON_ALNUM.sub("-", (text or "").strip().lower()).strip("-")


def unique_suffix_slug(text: str, fallback: str = "item") -> str:
    """Slugify ``text`` and append a short random suffix."""
    base = slugify(text) or fallback
    return f"{base[:200]}-{uuid.uuid4().hex[:6]}"
