"""End-to-end processing: resolve a text, assemble its bibliography, write it out."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
import logging
from pathlib import Path

from .assembler import LF, BibliographyAssembler
from .diagnostics import DiagnosticEmitter
from .entries import Entry, EntryStore
from .resolver import Resolution, TextResolver


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessedDocument:
    """Output strings of one run, each terminated by a line break."""

    text: str | None
    bibliography: str
    resolution: Resolution | None = None

    def parts(self) -> Iterator[str]:
        if self.text is not None:
            yield self.text
        yield self.bibliography

    def render(self) -> str:
        return "".join(self.parts())


def process_bibliography(
    text: str | None,
    entry_store: EntryStore,
    text_formatter: Callable[[Entry], str],
    bib_formatter: Callable[[Entry], str],
    *,
    newline: str = LF,
    emitter: DiagnosticEmitter | None = None,
) -> ProcessedDocument:
    """Resolve ``text`` (when given) and build the matching bibliography."""
    assembler = BibliographyAssembler(newline=newline)

    if text is None:
        logger.debug("No text supplied; listing bibliography of %d entries", len(entry_store))
        return ProcessedDocument(
            text=None,
            bibliography=assembler.assemble_from_store(entry_store, bib_formatter),
        )

    resolution = TextResolver(emitter=emitter).resolve(text, entry_store, text_formatter)
    bibliography = assembler.assemble_from_resolved(resolution.entries, bib_formatter)
    return ProcessedDocument(
        text=resolution.text + newline,
        bibliography=bibliography,
        resolution=resolution,
    )


def write_document(
    path: Path | str,
    document: ProcessedDocument,
    *,
    encoding: str = "utf-8",
) -> Path:
    """Write every part of ``document`` to ``path``."""
    target = Path(path)
    # newline="" keeps the configured line ending untouched on every platform.
    with target.open("w", encoding=encoding, newline="") as handle:
        for part in document.parts():
            handle.write(part)
    logger.debug("Wrote %s", target)
    return target


__all__ = ["ProcessedDocument", "process_bibliography", "write_document"]
