"""Bibliography entries and the store that indexes them by citation code."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
import re
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from .exceptions import (
    DuplicateCodeError,
    DuplicateIndexError,
    InvalidRecordError,
    UnknownCodeError,
)


_INDEX_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True, slots=True)
class Entry:
    """One bibliographic work.

    The formatting fields are opaque to the resolver; they are only handed to
    formatter callbacks. ``disambiguation_id`` is never set on entries held by
    an :class:`EntryStore`; the resolver passes annotated copies to formatters.
    """

    code: str
    explicit_index: int | None = None
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False)
    disambiguation_id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def authors(self) -> list[str]:
        value = self.fields.get("authors")
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(author) for author in value]

    @property
    def title(self) -> str:
        return str(self.fields.get("title") or "")

    @property
    def year(self) -> str:
        value = self.fields.get("year")
        return "" if value is None else str(value)

    def with_disambiguation(self, disambiguation_id: int | None) -> Entry:
        """Return a copy of the entry carrying ``disambiguation_id``."""
        if disambiguation_id == self.disambiguation_id:
            return self
        return replace(self, disambiguation_id=disambiguation_id)


@runtime_checkable
class EntryReader(Protocol):
    """Strategy turning one raw bibliography record into an entry."""

    def interpret(self, raw_record: Any) -> tuple[str, int | None, Entry]: ...


class RecordReader:
    """Interpret mapping records carrying ``code`` and an optional ``index``.

    Every other key of the record is kept as a formatting field.
    """

    def __init__(self, *, code_key: str = "code", index_key: str = "index") -> None:
        self.code_key = code_key
        self.index_key = index_key

    def interpret(self, raw_record: Any) -> tuple[str, int | None, Entry]:
        if not isinstance(raw_record, Mapping):
            raise InvalidRecordError(
                f"Bibliography record must be a mapping, got {type(raw_record).__name__}."
            )

        code = raw_record.get(self.code_key)
        if not isinstance(code, str) or not code.strip():
            raise InvalidRecordError(f"Bibliography record has no usable code: {code!r}")
        code = code.strip()

        index = self._coerce_index(code, raw_record.get(self.index_key))
        fields = {
            key: value
            for key, value in raw_record.items()
            if key not in {self.code_key, self.index_key}
        }
        return code, index, Entry(code=code, explicit_index=index, fields=fields)

    def _coerce_index(self, code: str, value: Any) -> int | None:
        if value is None:
            return None
        if isinstance(value, bool):
            raise InvalidRecordError(f"Entry {code!r} has a non-integer index: {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str) and _INDEX_PATTERN.fullmatch(value.strip()):
            return int(value.strip())
        raise InvalidRecordError(f"Entry {code!r} has a non-integer index: {value!r}")


class EntryStore:
    """Bibliography entries keyed by citation code, in load order."""

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        self._indices: dict[int, str] = {}

    @classmethod
    def load(
        cls,
        records: Iterable[Any],
        reader: EntryReader | None = None,
    ) -> EntryStore:
        """Build a store from raw records, rejecting duplicate codes and indices."""
        store = cls()
        active_reader = reader or RecordReader()
        for record in records:
            code, index, entry = active_reader.interpret(record)
            store._add(code, index, entry)
        return store

    def _add(self, code: str, index: int | None, entry: Entry) -> None:
        if code in self._entries:
            raise DuplicateCodeError(code)
        if index is not None:
            if index in self._indices:
                raise DuplicateIndexError(index, code)
            self._indices[index] = code
        if entry.code != code or entry.explicit_index != index:
            entry = replace(entry, code=code, explicit_index=index)
        self._entries[code] = entry

    def lookup(self, code: str) -> Entry:
        """Return the entry registered under ``code``."""
        try:
            return self._entries[code]
        except KeyError:
            raise UnknownCodeError(code) from None

    def all_entries_in_load_order(self) -> Sequence[Entry]:
        return tuple(self._entries.values())

    def explicitly_indexed(self) -> Sequence[Entry]:
        """Return entries carrying an explicit index, sorted by that index."""
        return tuple(self._entries[self._indices[index]] for index in sorted(self._indices))

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["Entry", "EntryReader", "EntryStore", "RecordReader"]
