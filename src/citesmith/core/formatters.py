"""Reference and bibliography formatters shipped with citesmith."""

from __future__ import annotations

from collections.abc import Callable
import string

from .entries import Entry
from .exceptions import UnknownFormatterError


def disambiguation_suffix(disambiguation_id: int | None) -> str:
    """Return the letter suffix for an id: ``a``..``z``, then ``aa``, ``ab``..."""
    if disambiguation_id is None:
        return ""
    if disambiguation_id < 0:
        raise ValueError(f"Disambiguation id must be non-negative, got {disambiguation_id}")

    letters: list[str] = []
    value = disambiguation_id + 1
    while value:
        value, remainder = divmod(value - 1, 26)
        letters.append(string.ascii_lowercase[remainder])
    return "".join(reversed(letters))


def _authors(entry: Entry) -> str:
    return ", ".join(entry.authors)


def author_year_reference(entry: Entry) -> str:
    """Render a short in-text reference such as ``Doe, Roe: 2000b``."""
    return f"{_authors(entry)}: {entry.year}{disambiguation_suffix(entry.disambiguation_id)}"


def author_title_bibliography(entry: Entry) -> str:
    """Render a bibliography line such as ``Doe. A Title. 2000b``."""
    suffix = disambiguation_suffix(entry.disambiguation_id)
    return f"{_authors(entry)}. {entry.title}. {entry.year}{suffix}"


FORMATTERS: dict[str, Callable[[Entry], str]] = {
    "author-year": author_year_reference,
    "author-title": author_title_bibliography,
}


def get_formatter(name: str) -> Callable[[Entry], str]:
    try:
        return FORMATTERS[name]
    except KeyError:
        available = ", ".join(sorted(FORMATTERS))
        raise UnknownFormatterError(
            f"Unknown formatter '{name}'. Available formatters: {available}"
        ) from None


__all__ = [
    "FORMATTERS",
    "author_title_bibliography",
    "author_year_reference",
    "disambiguation_suffix",
    "get_formatter",
]
