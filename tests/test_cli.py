from pathlib import Path
import textwrap

from typer.testing import CliRunner

from citesmith.ui.cli import app


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(content).strip() + "\n", encoding="utf-8")
    return path


def _library(tmp_path: Path) -> Path:
    return _write(
        tmp_path,
        "bibdata.yml",
        """
        - code: alexander
          authors: [Alexander]
          title: Notes
          year: 1964
        - code: john1
          authors: [John]
          title: First
          year: 1882
        - code: john3
          index: 1
          authors: [John]
          title: Third
          year: 1882
        """,
    )


def test_cli_resolve_prints_text_and_bibliography(tmp_path: Path) -> None:
    bib = _library(tmp_path)
    text = _write(tmp_path, "text.txt", "Quote (ref{alexander}), (ref{john1}) and (ref{john3}).")

    result = CliRunner().invoke(app, ["resolve", str(bib), "--text", str(text)])

    assert result.exit_code == 0, result.output
    assert result.stdout == (
        "Quote (Alexander: 1964), (John: 1882a) and (John: 1882b).\n\n"
        "Alexander. Notes. 1964\n"
        "John. First. 1882a\n"
        "John. Third. 1882b\n"
    )


def test_cli_resolve_without_text_lists_explicit_entries(tmp_path: Path) -> None:
    bib = _library(tmp_path)

    result = CliRunner().invoke(app, ["resolve", str(bib)])

    assert result.exit_code == 0, result.output
    assert result.stdout == "John. Third. 1882\n"


def test_cli_resolve_writes_output_file(tmp_path: Path) -> None:
    bib = _library(tmp_path)
    text = _write(tmp_path, "text.txt", "See ref{alexander}.")
    output = tmp_path / "out.txt"

    result = CliRunner().invoke(
        app,
        ["resolve", str(bib), "--text", str(text), "--output", str(output), "--crlf"],
    )

    assert result.exit_code == 0, result.output
    assert "Done" in result.output
    assert output.read_bytes() == (
        b"See Alexander: 1964.\n\r\nAlexander. Notes. 1964\r\n"
    )


def test_cli_resolve_honours_config_file(tmp_path: Path) -> None:
    bib = _library(tmp_path)
    text = _write(tmp_path, "text.txt", "ref{alexander}")
    config = _write(
        tmp_path,
        "citesmith.yml",
        """
        citesmith:
          reference_style: author-title
        """,
    )

    result = CliRunner().invoke(
        app, ["resolve", str(bib), "--text", str(text), "--config", str(config)]
    )

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("Alexander. Notes. 1964\n")


def test_cli_unknown_code_fails_without_output(tmp_path: Path) -> None:
    bib = _library(tmp_path)
    text = _write(tmp_path, "text.txt", "ref{alexander} ref{ghost}")
    output = tmp_path / "out.txt"

    result = CliRunner().invoke(
        app, ["resolve", str(bib), "--text", str(text), "--output", str(output)]
    )

    assert result.exit_code == 1
    assert "ghost" in result.output
    assert not output.exists()


def test_cli_duplicate_code_fails(tmp_path: Path) -> None:
    bib = _write(
        tmp_path,
        "dup.yml",
        """
        - code: same
        - code: same
        """,
    )

    result = CliRunner().invoke(app, ["resolve", str(bib)])

    assert result.exit_code == 1
    assert "Duplicate citation code" in result.output


def test_cli_unknown_style_fails(tmp_path: Path) -> None:
    bib = _library(tmp_path)

    result = CliRunner().invoke(app, ["resolve", str(bib), "--reference-style", "apa"])

    assert result.exit_code == 1
    assert "error" in result.output


def test_cli_list_outputs_entries(tmp_path: Path) -> None:
    bib = _library(tmp_path)

    result = CliRunner().invoke(app, ["list", str(bib)])

    assert result.exit_code == 0, result.output
    assert "Bibliography Entries" in result.stdout
    assert "alexander" in result.stdout
    assert "john3" in result.stdout


def test_cli_cited_lists_codes(tmp_path: Path) -> None:
    text = _write(tmp_path, "text.txt", "ref{b} ref{a} ref{b}")

    result = CliRunner().invoke(app, ["cited", str(text)])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["b", "a"]


def test_cli_version() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("citesmith ")


def test_cli_verbose_reports_collisions(tmp_path: Path) -> None:
    bib = _library(tmp_path)
    text = _write(tmp_path, "text.txt", "(ref{john1}) and (ref{john3})")

    quiet = CliRunner().invoke(app, ["resolve", str(bib), "--text", str(text)])
    verbose = CliRunner().invoke(app, ["-v", "resolve", str(bib), "--text", str(text)])

    assert quiet.exit_code == 0, quiet.output
    assert "Ambiguous reference" not in quiet.output
    assert verbose.exit_code == 0, verbose.output
    assert "Ambiguous reference 'John: 1882' shared by: john1, john3" in verbose.output
    assert "Resolved 2 cited entries in 2 passes" in verbose.output
    assert "john1 -> a" not in verbose.output


def test_cli_very_verbose_lists_suffix_assignments(tmp_path: Path) -> None:
    bib = _library(tmp_path)
    text = _write(tmp_path, "text.txt", "(ref{john1}) and (ref{john3})")

    result = CliRunner().invoke(app, ["-vv", "resolve", str(bib), "--text", str(text)])

    assert result.exit_code == 0, result.output
    assert "John: 1882: john1 -> a, john3 -> b" in result.output


def test_cli_parse_error_shows_root_cause(tmp_path: Path) -> None:
    bib = _write(tmp_path, "broken.json", "[{")

    result = CliRunner().invoke(app, ["resolve", str(bib)])

    assert result.exit_code == 1
    assert "Failed to parse" in result.output
    assert "cause: Expecting property name" in result.output


def test_cli_list_parse_error_shows_root_cause(tmp_path: Path) -> None:
    bib = _write(tmp_path, "broken.yml", "- code: [unterminated")

    result = CliRunner().invoke(app, ["list", str(bib)])

    assert result.exit_code == 1
    assert "Failed to parse" in result.output
    assert "cause: " in result.output


def test_cli_cited_uses_configured_encoding(tmp_path: Path) -> None:
    text = tmp_path / "text.txt"
    text.write_bytes("Grüße ref{b} ref{a}\n".encode("latin-1"))
    config = _write(tmp_path, "citesmith.yml", "encoding: latin-1")

    default = CliRunner().invoke(app, ["cited", str(text)])
    configured = CliRunner().invoke(app, ["cited", str(text), "--config", str(config)])

    assert default.exit_code == 1
    assert "Failed to read" in default.output
    assert configured.exit_code == 0, configured.output
    assert configured.stdout.splitlines() == ["b", "a"]
