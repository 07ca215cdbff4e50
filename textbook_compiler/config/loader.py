"""Load compiler configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _attribute_names, _normalize_names, _path_prefix, _positive_int
from .models import CompilerConfig


def load_compiler_config(path: Path) -> CompilerConfig:
    """Load the YAML file describing compiler settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``textbook.yaml``).

    Returns
    -------
    CompilerConfig
        Parsed configuration; keys missing from the file keep their defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    CompilerConfigError
        If a value has the wrong shape (for example, a relative
        ``resource_root``).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from textbook_compiler.config import load_compiler_config
    >>> config = load_compiler_config(Path("textbook.yaml"))  # doctest: +SKIP
    >>> config.resource_root  # doctest: +SKIP
    '/resources'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = CompilerConfig()

    resource_root = defaults.resource_root
    if "resource_root" in raw:
        resource_root = _path_prefix(raw["resource_root"], field="resource_root")
    emoji_root = defaults.emoji_root
    if "emoji_root" in raw:
        emoji_root = _path_prefix(raw["emoji_root"], field="emoji_root")
    emoji_size = defaults.emoji_size
    if "emoji_size" in raw:
        emoji_size = _positive_int(raw["emoji_size"], field="emoji_size")
    data_attributes = defaults.data_attributes
    if "data_attributes" in raw:
        data_attributes = _attribute_names(raw["data_attributes"])
    markdown_extensions = defaults.markdown_extensions
    if "markdown_extensions" in raw:
        markdown_extensions = _normalize_names(
            raw["markdown_extensions"], field="markdown_extensions"
        )

    return CompilerConfig(
        resource_root=resource_root,
        emoji_root=emoji_root,
        emoji_size=emoji_size,
        data_attributes=data_attributes,
        markdown_extensions=markdown_extensions,
        pygments_style=str(raw.get("pygments_style", defaults.pygments_style)),
    )


__all__ = ["load_compiler_config"]
