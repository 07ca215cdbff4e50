r"""Source-level rewrites applied to textbook Markdown before parsing.

Each rewrite is a :class:`RewriteRule` with a precondition pattern and a
replacement. Rules run once, in the order returned by :func:`build_rules`, and
leave unmatched text untouched.

Example
-------
>>> from textbook_compiler.source_rewriter import rewrite_source
>>> rewrite_source('<img src="images/a.png" when="x">', "atoms")
'<img src="/resources/atoms/images/a.png" data-when="x">'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import RESOURCE_PATH_TEMPLATE
from .config import CompilerConfig

IMAGE_PREFIX_PATTERN = re.compile(r"""(url\(|src="|href="|background=")images/""")


@dc.dataclass(slots=True, frozen=True)
class RewriteRule:
    """A named regular-expression substitution over the raw source.

    Attributes
    ----------
    name : str
        Identifier used in tests and debugging output.
    pattern : re.Pattern[str]
        Text that must match for the rule to apply.
    replacement : str or callable
        Replacement passed to :meth:`re.Pattern.sub`.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: str | typ.Callable[[re.Match[str]], str]

    def apply(self, text: str) -> str:
        """Return ``text`` with every match of the rule replaced."""
        return self.pattern.sub(self.replacement, text)


def _image_rule(document_id: str, resource_root: str) -> RewriteRule:
    """Point relative ``images/`` references at the document's resources."""
    prefix = RESOURCE_PATH_TEMPLATE.format(root=resource_root, document=document_id)

    def _replace(match: re.Match[str]) -> str:
        return f"{match.group(1)}{prefix}"

    return RewriteRule("image_paths", IMAGE_PREFIX_PATTERN, _replace)


def _data_attribute_rule(names: typ.Iterable[str]) -> RewriteRule | None:
    """Prefix bare attribute names with ``data-``.

    Names already carrying the prefix (``data-when=``) or embedded in a longer
    identifier (``unless-when=``) are left alone.
    """
    escaped = [re.escape(name) for name in names]
    if not escaped:
        return None
    pattern = re.compile(rf"(?<![\w-])({'|'.join(escaped)})=")
    return RewriteRule("data_attributes", pattern, r"data-\1=")


def build_rules(
    document_id: str, config: CompilerConfig | None = None
) -> list[RewriteRule]:
    """Return the ordered rewrite rules for ``document_id``."""
    config = config or CompilerConfig()
    rules = [_image_rule(document_id, config.resource_root)]
    attribute_rule = _data_attribute_rule(config.data_attributes)
    if attribute_rule is not None:
        rules.append(attribute_rule)
    return rules


def rewrite_source(
    text: str, document_id: str, config: CompilerConfig | None = None
) -> str:
    """Apply every rewrite rule to ``text`` in order.

    Parameters
    ----------
    text : str
        Raw textbook Markdown.
    document_id : str
        Identifier namespacing the document's image resources.
    config : CompilerConfig, optional
        Settings providing the resource root and renamed attributes.

    Returns
    -------
    str
        The rewritten source.
    """
    for rule in build_rules(document_id, config):
        text = rule.apply(text)
    return text


__all__ = ["RewriteRule", "build_rules", "rewrite_source"]
