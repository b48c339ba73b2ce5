"""Citation marker resolution.

Architecture
: `TextResolver` substitutes every ``ref{code}`` marker with the reference
  string produced by a caller-supplied formatter. Each code is formatted once
  per pass; later occurrences reuse the cached string.
: Two distinct entries may format to the same reference string. The first
  pass records these collisions in a `DisambiguationTable`, numbering the
  colliding entries in order of first appearance. When any collision is found
  the whole text is scanned once more, this time handing the formatter entries
  annotated with their `disambiguation_id` so it can append a suffix.
: Entries held by the `EntryStore` are never mutated. The table is a side
  structure owned by one resolution run.

Usage Example

```pycon
>>> from citesmith.core.entries import EntryStore
>>> from citesmith.core.formatters import author_year_reference
>>> store = EntryStore.load([
...     {"code": "x", "authors": ["Doe"], "year": 2000},
...     {"code": "y", "authors": ["Doe"], "year": 2000},
... ])
>>> TextResolver().resolve("(ref{x}) and (ref{y})", store, author_year_reference).text
'(Doe: 2000a) and (Doe: 2000b)'
```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
import re
from typing import Any

from .diagnostics import DiagnosticEmitter, NullEmitter
from .entries import Entry, EntryStore


CITATION_PATTERN = re.compile(r"ref\{([A-Za-z0-9_]+)\}")

Formatter = Callable[[Entry], str]


class DisambiguationTable:
    """Side table mapping citation codes to disambiguation ids."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    def assign(self, code: str, disambiguation_id: int) -> None:
        self._ids.setdefault(code, disambiguation_id)

    def get(self, code: str) -> int | None:
        return self._ids.get(code)

    def annotate(self, entry: Entry) -> Entry:
        """Return ``entry`` carrying the id recorded for its code, if any."""
        return entry.with_disambiguation(self._ids.get(entry.code))

    def as_dict(self) -> dict[str, int]:
        return dict(self._ids)

    def __contains__(self, code: object) -> bool:
        return code in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)


@dataclass(slots=True)
class _ReferenceUse:
    first_code: str
    count: int = 1


@dataclass(slots=True)
class _PassResult:
    text: str
    entries: list[Entry]
    collisions: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving the citation markers of one text."""

    text: str
    entries: tuple[Entry, ...]
    disambiguation: Mapping[str, int]
    passes: int = 1
    unresolved: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        yield self.text
        yield self.entries


class TextResolver:
    """Replace citation markers with unique, formatted references."""

    def __init__(
        self,
        *,
        pattern: re.Pattern[str] = CITATION_PATTERN,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.pattern = pattern
        self.emitter = emitter or NullEmitter()

    def resolve(self, text: str, entry_store: EntryStore, formatter: Formatter) -> Resolution:
        """Resolve ``text`` against ``entry_store``.

        Raises :class:`~citesmith.core.exceptions.UnknownCodeError` as soon as
        a marker cites a code missing from the store.
        """
        table = DisambiguationTable()
        result = self._scan(text, entry_store, formatter, table, record=True)
        passes = 1
        unresolved: tuple[str, ...] = ()

        if result.collisions:
            for reference, codes in result.collisions.items():
                self.emitter.event(
                    "collision_detected", {"reference": reference, "codes": list(codes)}
                )
            result = self._scan(text, entry_store, formatter, table, record=False)
            passes = 2
            unresolved = tuple(result.collisions)
            for reference, codes in result.collisions.items():
                self.emitter.event(
                    "collision_persisted", {"reference": reference, "codes": list(codes)}
                )
                self.emitter.warning(
                    f"Reference '{reference}' remains ambiguous for {', '.join(codes)}; "
                    "the formatter ignores disambiguation ids."
                )

        self.emitter.event(
            "citations_resolved", {"entries": len(result.entries), "passes": passes}
        )
        return Resolution(
            text=result.text,
            entries=tuple(result.entries),
            disambiguation=table.as_dict(),
            passes=passes,
            unresolved=unresolved,
        )

    def _scan(
        self,
        text: str,
        entry_store: EntryStore,
        formatter: Formatter,
        table: DisambiguationTable,
        *,
        record: bool,
    ) -> _PassResult:
        code_to_reference: dict[str, str] = {}
        uses: dict[str, _ReferenceUse] = {}
        result = _PassResult(text="", entries=[])

        def substitute(match: re.Match[str]) -> str:
            code = match.group(1)
            reference = code_to_reference.get(code)
            if reference is not None:
                return reference

            entry = table.annotate(entry_store.lookup(code))
            reference = formatter(entry)
            code_to_reference[code] = reference
            result.entries.append(entry)

            use = uses.get(reference)
            if use is None:
                uses[reference] = _ReferenceUse(first_code=code)
                return reference

            colliding = result.collisions.setdefault(reference, [use.first_code])
            colliding.append(code)
            if record:
                if use.count == 1:
                    table.assign(use.first_code, 0)
                table.assign(code, use.count)
            use.count += 1
            return reference

        result.text = self.pattern.sub(substitute, text)
        return result


def find_citations(text: str, *, pattern: re.Pattern[str] = CITATION_PATTERN) -> list[str]:
    """Return the distinct codes cited in ``text`` in first-appearance order."""
    seen: dict[str, None] = {}
    for match in pattern.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def resolve_text(
    text: str,
    entry_store: EntryStore,
    formatter: Formatter,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> tuple[str, Sequence[Entry]]:
    """Convenience wrapper returning ``(resolved_text, ordered_entries)``."""
    resolution = TextResolver(emitter=emitter).resolve(text, entry_store, formatter)
    return resolution.text, resolution.entries


__all__ = [
    "CITATION_PATTERN",
    "DisambiguationTable",
    "Formatter",
    "Resolution",
    "TextResolver",
    "find_citations",
    "resolve_text",
]
