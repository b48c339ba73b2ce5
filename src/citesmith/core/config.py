"""Configuration model for citation resolution runs.

CitationConfig

`line_ending` (`"lf" | "crlf"`)
: Line terminator used to join bibliography lines and to terminate both the
  resolved text and the bibliography listing.

`reference_style` (`str`)
: Name of the registered formatter rendering in-text references.

`bibliography_style` (`str`)
: Name of the registered formatter rendering bibliography lines.

`encoding` (`str`)
: Encoding used when reading source files and writing the output file.

Configuration files are YAML documents. Settings may sit at the top level or
under a `citesmith` section.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
import yaml

from .assembler import CRLF, LF
from .exceptions import ConfigError
from .formatters import FORMATTERS


class CitationConfig(BaseModel):
    """Settings shared by the CLI and the programmatic pipeline."""

    model_config = ConfigDict(extra="forbid")

    line_ending: Literal["lf", "crlf"] = "lf"
    reference_style: str = "author-year"
    bibliography_style: str = "author-title"
    encoding: str = "utf-8"

    @field_validator("reference_style", "bibliography_style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        if value not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS))
            raise ValueError(f"unknown style '{value}' (available: {available})")
        return value

    @property
    def newline(self) -> str:
        return CRLF if self.line_ending == "crlf" else LF


def config_from_mapping(payload: Mapping[str, Any] | None) -> CitationConfig:
    data = dict(payload or {})
    section = data.get("citesmith")
    if isinstance(section, Mapping):
        data = dict(section)
    try:
        return CitationConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(path: Path | str) -> CitationConfig:
    """Read a YAML configuration file."""
    file_path = Path(path)
    try:
        payload = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read configuration '{file_path}'.") from exc
    if payload is not None and not isinstance(payload, Mapping):
        raise ConfigError(f"Configuration '{file_path}' must contain a mapping.")
    return config_from_mapping(payload)


__all__ = ["CitationConfig", "config_from_mapping", "load_config"]
