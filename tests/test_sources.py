from pathlib import Path
import textwrap

import pytest

from citesmith.core.exceptions import BibliographySourceError, DuplicateCodeError
from citesmith.core.sources import (
    load_records,
    load_store,
    records_from_bibtex,
    records_from_mapping_payload,
)


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(content).strip() + "\n", encoding="utf-8")
    return path


def test_yaml_list_of_entries(tmp_path: Path) -> None:
    bib = _write(
        tmp_path,
        "library.yml",
        """
        - code: alexander
          authors: [Alexander]
          title: Notes on the Synthesis of Form
          year: 1964
        - code: john1
          index: 2
          authors: [John]
          title: First
          year: 1882
        """,
    )

    store = load_store(bib)

    assert [entry.code for entry in store] == ["alexander", "john1"]
    assert store.lookup("john1").explicit_index == 2
    assert store.lookup("alexander").title == "Notes on the Synthesis of Form"


def test_yaml_entries_section(tmp_path: Path) -> None:
    bib = _write(
        tmp_path,
        "library.yaml",
        """
        entries:
          - code: a
          - code: b
        """,
    )

    assert [record["code"] for record in load_records(bib)] == ["a", "b"]


def test_json_source(tmp_path: Path) -> None:
    bib = _write(tmp_path, "library.json", '[{"code": "j", "authors": ["Jay"], "year": 2020}]')

    store = load_store(bib)

    assert store.lookup("j").authors == ["Jay"]


def test_bibtex_source(tmp_path: Path) -> None:
    bib = _write(
        tmp_path,
        "library.bib",
        """
        @book{doe2000,
            title = {Example Book},
            author = {Doe, Jane and von Neumann, John},
            year = {2000},
            index = {3},
        }

        @article{roe1999,
            Title = {Example Article},
            editor = {Roe, Richard},
            year = {1999},
        }
        """,
    )

    records = records_from_bibtex(bib)

    assert [record["code"] for record in records] == ["doe2000", "roe1999"]
    doe = records[0]
    assert doe["type"] == "book"
    assert doe["authors"] == ["Doe", "von Neumann"]
    assert doe["title"] == "Example Book"
    assert doe["index"] == "3"
    assert records[1]["authors"] == ["Roe"]
    assert records[1]["title"] == "Example Article"

    store = load_store(bib)
    assert store.lookup("doe2000").explicit_index == 3
    assert store.lookup("doe2000").year == "2000"


def test_bibtex_honours_encoding(tmp_path: Path) -> None:
    bib = tmp_path / "latin.bib"
    bib.write_text(
        "@book{mueller1900, author = {Müller, Hans}, title = {Straßen}, year = 1900}\n",
        encoding="latin-1",
    )

    store = load_store(bib, encoding="latin-1")

    entry = store.lookup("mueller1900")
    assert entry.authors == ["Müller"]
    assert entry.title == "Straßen"
    with pytest.raises(BibliographySourceError):
        load_store(bib)


def test_bibtex_duplicate_keys_raise(tmp_path: Path) -> None:
    bib = _write(
        tmp_path,
        "dup.bib",
        """
        @book{doe2000, title = {One}}
        @book{doe2000, title = {Two}}
        """,
    )

    with pytest.raises(DuplicateCodeError):
        load_store(bib)


def test_duplicate_codes_in_yaml_raise(tmp_path: Path) -> None:
    bib = _write(
        tmp_path,
        "dup.yml",
        """
        - code: same
        - code: same
        """,
    )

    with pytest.raises(DuplicateCodeError):
        load_store(bib)


def test_unsupported_suffix(tmp_path: Path) -> None:
    bib = _write(tmp_path, "library.lua", "entry{code = 'x'}")

    with pytest.raises(BibliographySourceError, match="Unsupported"):
        load_records(bib)


def test_malformed_yaml_reports_path(tmp_path: Path) -> None:
    bib = _write(tmp_path, "broken.yml", "- code: [unterminated")

    with pytest.raises(BibliographySourceError) as excinfo:
        load_records(bib)

    assert excinfo.value.path == bib


def test_missing_file_is_a_source_error(tmp_path: Path) -> None:
    with pytest.raises(BibliographySourceError):
        load_records(tmp_path / "missing.bib")


def test_payload_must_be_a_list() -> None:
    assert records_from_mapping_payload(None) == []
    with pytest.raises(BibliographySourceError):
        records_from_mapping_payload("scalar")
