"""Load and validate compiler configuration YAML.

This subpackage parses an optional ``textbook.yaml`` file and produces the
frozen :class:`CompilerConfig` dataclass shared by every compilation. The
primary entry point is :func:`load_compiler_config`, which applies defaults
for missing keys and rejects malformed values.

Examples
--------
>>> from pathlib import Path
>>> from textbook_compiler.config import CompilerConfig, load_compiler_config
>>> CompilerConfig().emoji_root
'/images/emoji'
>>> config = load_compiler_config(Path("textbook.yaml"))  # doctest: +SKIP
"""

from .loader import load_compiler_config
from .models import CompilerConfig, CompilerConfigError

__all__ = ["CompilerConfig", "CompilerConfigError", "load_compiler_config"]
