from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest

from textbook_compiler import cli

if typ.TYPE_CHECKING:
    from pathlib import Path

SOURCE = "# Atoms\n\n---\n\nSee [nucleus](gloss:nucleus).\n"


def _write_source(tmp_path: Path) -> Path:
    chapter = tmp_path / "atoms"
    chapter.mkdir()
    source = chapter / "content.md"
    source.write_text(SOURCE, encoding="utf-8")
    return source


def test_compile_writes_json_next_to_source(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    source = _write_source(tmp_path)

    cli.compile(source)

    target = source.with_suffix(".json")
    payload = msgspec_json.decode(target.read_bytes())
    assert payload["data"]["title"] == "Atoms"
    assert payload["gloss"] == ["nucleus"]
    assert list(payload["steps"]) == ["step-0"]
    assert "wrote" in capsys.readouterr().out


def test_document_id_defaults_to_directory_name(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    source = _write_source(tmp_path)
    source.write_text('<img src="images/atom.png">\n', encoding="utf-8")
    output = tmp_path / "out" / "bundle.json"

    cli.compile(source, output=output)

    payload = msgspec_json.decode(output.read_bytes())
    assert "/resources/atoms/images/atom.png" in payload["html"]


def test_explicit_config_and_document_id_are_used(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    source = _write_source(tmp_path)
    source.write_text('<img src="images/atom.png">\n', encoding="utf-8")
    config = tmp_path / "site.yaml"
    config.write_text("resource_root: /static\n", encoding="utf-8")
    output = tmp_path / "bundle.json"

    cli.compile(source, document_id="chem", output=output, config=config)

    html = msgspec_json.decode(output.read_bytes())["html"]
    assert "/static/chem/images/atom.png" in html


def test_missing_source_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        cli.compile(tmp_path / "missing.md")


def test_explicit_missing_config_is_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    source = _write_source(tmp_path)
    with pytest.raises(FileNotFoundError):
        cli.compile(source, config=tmp_path / "nope.yaml")
