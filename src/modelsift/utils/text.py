"""Text helpers shared by the classifier and the search index."""

from __future__ import annotations

import re
from typing import Iterator

_TOKEN_RE = re.compile(r"[^\W_]+")
_NAME_SEPARATORS_RE = re.compile(r"[\s_\-.,()\[\]{}]+")


def iter_tokens(text: str) -> Iterator[str]:
    """Yield lowercase alphanumeric runs, splitting at every other character."""
    if not text:
        return iter(())
    return (match.group(0) for match in _TOKEN_RE.finditer(text.lower()))


def split_name(text: str) -> list[str]:
    """Split a file name on common separators, keeping the original casing."""
    return [part for part in _NAME_SEPARATORS_RE.split(text) if part]


def alnum_lower(text: str) -> str:
    """Lowercase ``text`` and drop every non alphanumeric character."""
    return "".join(char for char in text.lower() if char.isalnum())
