"""Primary public API for citesmith."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from citesmith.core.assembler import CRLF, LF, BibliographyAssembler
from citesmith.core.config import CitationConfig, load_config
from citesmith.core.entries import Entry, EntryReader, EntryStore, RecordReader
from citesmith.core.exceptions import (
    CitationError,
    DuplicateCodeError,
    DuplicateIndexError,
    UnknownCodeError,
)
from citesmith.core.formatters import (
    author_title_bibliography,
    author_year_reference,
    disambiguation_suffix,
)
from citesmith.core.pipeline import ProcessedDocument, process_bibliography, write_document
from citesmith.core.resolver import Resolution, TextResolver, find_citations, resolve_text
from citesmith.core.sources import load_store


try:
    __version__ = _pkg_version("citesmith")
except PackageNotFoundError:
    __version__ = "0.0.0"


__all__ = [
    "CRLF",
    "LF",
    "BibliographyAssembler",
    "CitationConfig",
    "CitationError",
    "DuplicateCodeError",
    "DuplicateIndexError",
    "Entry",
    "EntryReader",
    "EntryStore",
    "ProcessedDocument",
    "RecordReader",
    "Resolution",
    "TextResolver",
    "UnknownCodeError",
    "__version__",
    "author_title_bibliography",
    "author_year_reference",
    "disambiguation_suffix",
    "find_citations",
    "load_config",
    "load_store",
    "process_bibliography",
    "resolve_text",
    "write_document",
]
