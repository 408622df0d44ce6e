"""Slug generation for heading anchors and page routes"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated ASCII slug (may be empty)."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text, flags=re.ASCII)
    text = re.sub(r'\s+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


class SlugRegistry:
    """Hands out unique heading ids for a single document.

    The first claim of a slug returns it unchanged; repeats get -1, -2, ...
    Empty slugs are never suffixed.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._counts: dict[str, int] = {}

    def claim(self, text: str) -> str:
        base = slugify(text)
        if not base:
            return base
        candidate = base
        while candidate in self._seen:
            self._counts[base] = self._counts.get(base, 0) + 1
            candidate = f"{base}-{self._counts[base]}"
        self._seen.add(candidate)
        return candidate
