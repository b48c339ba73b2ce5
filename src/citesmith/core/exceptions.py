"""Custom exception hierarchy for citation resolution."""

from __future__ import annotations

from pathlib import Path


class CitationError(RuntimeError):
    """Base exception for citation resolution failures."""


class BibliographyLoadError(CitationError):
    """Raised when a bibliography source cannot be turned into entries."""


class DuplicateCodeError(BibliographyLoadError):
    """Raised when two bibliography records share the same citation code."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Duplicate citation code: {code!r}")
        self.code = code


class DuplicateIndexError(BibliographyLoadError):
    """Raised when two bibliography records share the same explicit index."""

    def __init__(self, index: int, code: str | None = None) -> None:
        message = f"Duplicate explicit index: {index}"
        if code is not None:
            message += f" (entry {code!r})"
        super().__init__(message)
        self.index = index
        self.code = code


class InvalidRecordError(BibliographyLoadError):
    """Raised when a raw bibliography record lacks a usable code or index."""


class BibliographySourceError(BibliographyLoadError):
    """Raised when a bibliography file cannot be read or parsed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class UnknownCodeError(CitationError):
    """Raised when a citation marker references a code absent from the store."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Citation code not in bibliography: {code!r}")
        self.code = code


class UnknownFormatterError(CitationError):
    """Raised when a formatter name is not registered."""


class ConfigError(CitationError):
    """Raised when a configuration file is invalid."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BibliographyLoadError",
    "BibliographySourceError",
    "CitationError",
    "ConfigError",
    "DuplicateCodeError",
    "DuplicateIndexError",
    "InvalidRecordError",
    "UnknownCodeError",
    "UnknownFormatterError",
    "exception_hint",
    "exception_messages",
]
