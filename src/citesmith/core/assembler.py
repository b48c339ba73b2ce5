"""Render the bibliography listing from resolved entries or a whole store."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .entries import Entry, EntryStore


LF = "\n"
CRLF = "\r\n"


class BibliographyAssembler:
    """Join formatted bibliography lines using a fixed line ending."""

    def __init__(self, *, newline: str = LF) -> None:
        self.newline = newline

    def assemble_from_resolved(
        self,
        ordered_entries: Iterable[Entry],
        bib_formatter: Callable[[Entry], str],
    ) -> str:
        """Format entries in the order they were first cited."""
        return self._join(bib_formatter(entry) for entry in ordered_entries)

    def assemble_from_store(
        self,
        entry_store: EntryStore,
        bib_formatter: Callable[[Entry], str],
    ) -> str:
        """Format a store when no text was supplied.

        Explicitly indexed entries win: when any entry carries an index, only
        those entries are listed, ascending by index. Otherwise every entry is
        listed in load order. Disambiguation never happens in this mode.
        """
        selected = entry_store.explicitly_indexed() or entry_store.all_entries_in_load_order()
        return self._join(bib_formatter(entry) for entry in selected)

    def _join(self, lines: Iterable[str]) -> str:
        return self.newline.join(lines) + self.newline


__all__ = ["CRLF", "LF", "BibliographyAssembler"]
