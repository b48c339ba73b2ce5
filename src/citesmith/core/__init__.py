"""Core citation resolution primitives.

Architecture
: `EntryStore` indexes bibliography entries by citation code. Records reach
  it through an `EntryReader` strategy so any serialisation can feed it.
: `TextResolver` replaces `ref{code}` markers, detects entries whose
  references collide and re-runs the scan once with disambiguation ids.
: `BibliographyAssembler` renders the listing either in cited order or, when
  no text is supplied, from the store itself.

Implementation Rationale
: Entries are immutable. Disambiguation ids live in a side table owned by a
  single resolution run, so a store can be shared between runs.
: Formatters are plain callables. The resolver cannot know in advance whether
  two references will collide, hence the second scan.
"""

from __future__ import annotations

from .assembler import CRLF, LF, BibliographyAssembler
from .config import CitationConfig, config_from_mapping, load_config
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .entries import Entry, EntryReader, EntryStore, RecordReader
from .exceptions import (
    BibliographyLoadError,
    BibliographySourceError,
    CitationError,
    ConfigError,
    DuplicateCodeError,
    DuplicateIndexError,
    InvalidRecordError,
    UnknownCodeError,
    UnknownFormatterError,
)
from .formatters import (
    FORMATTERS,
    author_title_bibliography,
    author_year_reference,
    disambiguation_suffix,
    get_formatter,
)
from .pipeline import ProcessedDocument, process_bibliography, write_document
from .resolver import (
    CITATION_PATTERN,
    DisambiguationTable,
    Resolution,
    TextResolver,
    find_citations,
    resolve_text,
)
from .sources import load_records, load_store


__all__ = [
    "CITATION_PATTERN",
    "CRLF",
    "FORMATTERS",
    "LF",
    "BibliographyAssembler",
    "BibliographyLoadError",
    "BibliographySourceError",
    "CitationConfig",
    "CitationError",
    "ConfigError",
    "DiagnosticEmitter",
    "DisambiguationTable",
    "DuplicateCodeError",
    "DuplicateIndexError",
    "Entry",
    "EntryReader",
    "EntryStore",
    "InvalidRecordError",
    "LoggingEmitter",
    "NullEmitter",
    "ProcessedDocument",
    "RecordReader",
    "Resolution",
    "TextResolver",
    "UnknownCodeError",
    "UnknownFormatterError",
    "author_title_bibliography",
    "author_year_reference",
    "config_from_mapping",
    "disambiguation_suffix",
    "find_citations",
    "get_formatter",
    "load_config",
    "load_records",
    "load_store",
    "process_bibliography",
    "resolve_text",
    "write_document",
]
