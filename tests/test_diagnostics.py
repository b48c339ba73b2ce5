import logging

import pytest

from citesmith.core.diagnostics import LoggingEmitter, NullEmitter, format_event_message


def test_format_collision_event() -> None:
    message = format_event_message(
        "collision_detected", {"reference": "Doe: 2000", "codes": ["x", "y"]}
    )

    assert message == "Ambiguous reference 'Doe: 2000' shared by: x, y"


def test_format_resolved_event_pluralises() -> None:
    assert (
        format_event_message("citations_resolved", {"entries": 3, "passes": 1})
        == "Resolved 3 cited entries in 1 pass"
    )
    assert (
        format_event_message("citations_resolved", {"entries": 2, "passes": 2})
        == "Resolved 2 cited entries in 2 passes"
    )


def test_unknown_event_has_no_message() -> None:
    assert format_event_message("something_else", {}) is None


def test_logging_emitter_forwards_to_logger(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("citesmith.test"))

    with caplog.at_level(logging.DEBUG, logger="citesmith.test"):
        emitter.warning("careful")
        emitter.event("collision_persisted", {"reference": "Doe"})
        emitter.event("custom", {"value": 1})

    messages = [record.getMessage() for record in caplog.records]
    assert "careful" in messages
    assert "Reference 'Doe' is still ambiguous after disambiguation" in messages
    assert "diagnostic event custom: {'value': 1}" in messages


def test_null_emitter_is_silent() -> None:
    emitter = NullEmitter()

    emitter.warning("ignored")
    emitter.error("ignored")
    emitter.event("ignored", {})

    assert emitter.debug_enabled is False


def test_cli_emitter_tracks_collision_assignments() -> None:
    from citesmith.ui.cli.diagnostics import CliEmitter
    from citesmith.ui.cli.state import CLIState

    emitter = CliEmitter(CLIState())
    emitter.event("collision_detected", {"reference": "Doe: 2000", "codes": ["x", "y"]})
    emitter.event("collision_detected", {"reference": "Roe", "codes": ["r", "s", "t"]})
    emitter.event("collision_persisted", {"reference": "Roe", "codes": ["r", "s", "t"]})

    assert emitter.collisions == {"Doe: 2000": ["x", "y"], "Roe": ["r", "s", "t"]}
    assert emitter.unresolved == ["Roe"]
    assert emitter.assignment_lines() == ["  Doe: 2000: x -> a, y -> b"]
