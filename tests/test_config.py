from __future__ import annotations

from pathlib import Path

import pytest

from textbook_compiler.config import CompilerConfig, CompilerConfigError, load_compiler_config


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "textbook.yaml"
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_full_config_is_loaded(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
resource_root: /static/
emoji_root: /img/emoji
emoji_size: 24
data_attributes: when delay reveal
markdown_extensions:
  - tables
  - fenced_code
pygments_style: friendly
""",
    )
    config = load_compiler_config(path)
    assert config == CompilerConfig(
        resource_root="/static",
        emoji_root="/img/emoji",
        emoji_size=24,
        data_attributes=("when", "delay", "reveal"),
        markdown_extensions=("tables", "fenced_code"),
        pygments_style="friendly",
    )


def test_missing_keys_keep_defaults(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "emoji_size: 16")
    config = load_compiler_config(path)
    assert config.emoji_size == 16
    assert config.resource_root == CompilerConfig().resource_root
    assert config.data_attributes == ("when", "delay", "animation")


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    assert load_compiler_config(_write_config(tmp_path, "")) == CompilerConfig()


def test_site_root_becomes_empty_prefix(tmp_path: Path) -> None:
    config = load_compiler_config(_write_config(tmp_path, "resource_root: /"))
    assert config.resource_root == ""


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_compiler_config(tmp_path / "absent.yaml")


def test_non_mapping_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        load_compiler_config(_write_config(tmp_path, "- a\n- b"))


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("resource_root: resources", "absolute path"),
        ("emoji_size: 0", "positive"),
        ("emoji_size: big", "integer"),
        ("data_attributes: ['9lives']", "valid attribute"),
        ("markdown_extensions: {tables: true}", "string or a list"),
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, body: str, message: str) -> None:
    with pytest.raises(CompilerConfigError, match=message):
        load_compiler_config(_write_config(tmp_path, body))
