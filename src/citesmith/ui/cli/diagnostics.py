"""Console reporting of resolver diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from citesmith.core.diagnostics import format_event_message
from citesmith.core.formatters import disambiguation_suffix

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Report citation collisions on stderr.

    With ``-v`` every detected collision is announced as it is found. With
    ``-vv`` the letter given to each colliding entry is listed once the text
    is resolved. Warnings always show.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self._state = state or get_cli_state()
        if debug_enabled is None:
            debug_enabled = self._state.show_tracebacks
        self.debug_enabled = bool(debug_enabled)
        self.collisions: dict[str, list[str]] = {}
        self.unresolved: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        reference = str(data.get("reference", ""))
        codes = [str(code) for code in data.get("codes", [])]

        if name == "collision_detected":
            self.collisions[reference] = codes
        elif name == "collision_persisted":
            # The resolver follows up with a warning naming the entries.
            self.unresolved.append(reference)
            return

        message = format_event_message(name, data)
        if message:
            render_message("info", message)
        if name == "citations_resolved" and self._state.verbosity >= 2:
            for line in self.assignment_lines():
                render_message("info", line)

    def assignment_lines(self) -> list[str]:
        """Describe which suffix each colliding entry received."""
        lines: list[str] = []
        for reference, codes in self.collisions.items():
            if reference in self.unresolved:
                continue
            labels = ", ".join(
                f"{code} -> {disambiguation_suffix(position)}"
                for position, code in enumerate(codes)
            )
            lines.append(f"  {reference}: {labels}")
        return lines


__all__ = ["CliEmitter"]
