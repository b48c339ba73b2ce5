"""Bibliography source loaders.

Each loader yields plain mapping records (``code``, optional ``index``, and
formatting fields) consumed by :meth:`EntryStore.load`. The resolver never
depends on a particular serialisation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import json
from pathlib import Path
import re
from typing import Any

from pybtex.database import BibliographyDataError, Person
from pybtex.database.input import bibtex
from pybtex.exceptions import PybtexError
import yaml

from .entries import EntryReader, EntryStore
from .exceptions import BibliographySourceError, DuplicateCodeError


_REPEATED_ENTRY = re.compile(r"repeated .*entry:\s*(?P<key>.+)$")
_PERSON_ROLES = ("author", "editor")


def records_from_mapping_payload(payload: Any, *, source: Path | None = None) -> list[Any]:
    """Extract the record list from a decoded YAML or JSON document."""
    if payload is None:
        return []
    if isinstance(payload, Mapping):
        payload = payload.get("entries", [])
    if not isinstance(payload, list):
        raise BibliographySourceError(
            "Bibliography document must be a list of entries or define an 'entries' list.",
            source,
        )
    return payload


def records_from_yaml(path: Path | str, *, encoding: str = "utf-8") -> list[Any]:
    file_path = Path(path)
    try:
        payload = yaml.safe_load(file_path.read_text(encoding=encoding))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise BibliographySourceError(f"Failed to parse '{file_path}'.", file_path) from exc
    return records_from_mapping_payload(payload, source=file_path)


def records_from_json(path: Path | str, *, encoding: str = "utf-8") -> list[Any]:
    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding=encoding))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BibliographySourceError(f"Failed to parse '{file_path}'.", file_path) from exc
    return records_from_mapping_payload(payload, source=file_path)


def records_from_bibtex(path: Path | str, *, encoding: str = "utf-8") -> list[dict[str, Any]]:
    """Parse a BibTeX file into records keyed by citation key."""
    file_path = Path(path)
    parser = bibtex.Parser(encoding=encoding)
    try:
        data = parser.parse_file(str(file_path))
    except BibliographyDataError as exc:
        match = _REPEATED_ENTRY.search(str(exc))
        if match:
            raise DuplicateCodeError(match.group("key").strip()) from exc
        raise BibliographySourceError(f"Failed to parse '{file_path}'.", file_path) from exc
    except (OSError, UnicodeDecodeError, PybtexError) as exc:
        raise BibliographySourceError(f"Failed to parse '{file_path}'.", file_path) from exc

    return list(_bibtex_records(data.entries.items()))


def _bibtex_records(items: Iterable[tuple[str, Any]]) -> Iterator[dict[str, Any]]:
    for key, entry in items:
        record: dict[str, Any] = {"code": str(key), "type": entry.type}
        for name, value in entry.fields.items():
            record[str(name).lower()] = str(value)
        for role in _PERSON_ROLES:
            persons = entry.persons.get(role)
            if persons:
                record["authors"] = [_person_name(person) for person in persons]
                break
        yield record


def _person_name(person: Person) -> str:
    parts = [str(part) for part in (*person.prelast_names, *person.last_names)]
    text = " ".join(part for part in parts if part) or str(person)
    return text.replace("{", "").replace("}", "")


_LOADERS = {
    ".yml": records_from_yaml,
    ".yaml": records_from_yaml,
    ".json": records_from_json,
    ".bib": records_from_bibtex,
}


def load_records(path: Path | str, *, encoding: str = "utf-8") -> list[Any]:
    """Load raw records from a bibliography file, dispatching on its suffix."""
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    loader = _LOADERS.get(suffix)
    if loader is None:
        raise BibliographySourceError(
            f"Unsupported bibliography format '{suffix or file_path.name}'.", file_path
        )
    return loader(file_path, encoding=encoding)


def load_store(
    path: Path | str,
    *,
    reader: EntryReader | None = None,
    encoding: str = "utf-8",
) -> EntryStore:
    """Load a bibliography file straight into an :class:`EntryStore`."""
    return EntryStore.load(load_records(path, encoding=encoding), reader=reader)


__all__ = [
    "load_records",
    "load_store",
    "records_from_bibtex",
    "records_from_json",
    "records_from_mapping_payload",
    "records_from_yaml",
]
