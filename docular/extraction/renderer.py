"""Render doc descriptions and source listings into HTML fragments.

Descriptions are Markdown with JSDoc-style inline references: ``{@link a.b}``
and ``{@link a.b label}`` become anchors to ``#a.b``, the element id every
record carries in its partial. Source listings are highlighted with Pygments,
using a lexer picked from the file the code came from.

Example
-------
>>> from docular.extraction.renderer import resolve_inline_links
>>> resolve_inline_links("See {@link calc.add} or {@link calc.sub subtract}.")
'See [calc.add](#calc.add) or [subtract](#calc.sub).'
"""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound

INLINE_LINK_PATTERN = re.compile(r"\{@link\s+([^\s}]+)(?:\s+([^}]+?))?\s*\}")
FENCE_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCED_BLOCK_PATTERN = re.compile(
    r"^(`{3,}|~{3,})[ \t]*([\w+#.-]*)[^\n]*\n.*?^\1", re.DOTALL | re.MULTILINE
)
HIGHLIGHT_OPEN_TAG = re.compile(r'<div class="codehilite">')
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")
FALLBACK_LANGUAGE = "text"


def resolve_inline_links(text: str) -> str:
    """Turn ``{@link target [label]}`` references into Markdown anchor links."""

    def _link(match: re.Match[str]) -> str:
        target, label = match.group(1), match.group(2)
        return f"[{label or target}](#{target})"

    return INLINE_LINK_PATTERN.sub(_link, text)


def _tag_languages(html: str, languages: list[str]) -> str:
    """Add ``data-language`` to highlighted blocks, in document order."""
    if not languages:
        return html
    remaining = iter(languages)

    def _open_tag(_match: re.Match[str]) -> str:
        language = escape(next(remaining, FALLBACK_LANGUAGE), quote=True)
        return f'<div class="codehilite" data-language="{language}">'

    return HIGHLIGHT_OPEN_TAG.sub(_open_tag, html, len(languages))


class DocContentRenderer:
    """Render Markdown descriptions and highlighted source for doc partials."""

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    def markdown(self, text: str) -> str:
        """Render a Markdown description; blank text renders to ``""``.

        Fences indented by up to three spaces (common once the comment gutter
        is stripped) are unindented first, and each highlighted block is
        tagged with the language named on its opening fence.
        """
        if not text.strip():
            return ""
        source = resolve_inline_links(FENCE_INDENT_PATTERN.sub(r"\1", text))
        converter = Markdown(
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        languages = [
            match.group(2) or FALLBACK_LANGUAGE
            for match in FENCED_BLOCK_PATTERN.finditer(source)
        ]
        return _tag_languages(converter.convert(source), languages)

    def code_block(self, code: str, filename: str | None = None) -> str:
        """Highlight ``code`` with the lexer registered for ``filename``.

        Parameters
        ----------
        code : str
            Source that follows a documentation block.
        filename : str, optional
            Name of the originating file; plain text is used when it is
            missing or has no known lexer.

        Returns
        -------
        str
            A ``codehilite`` block tagged with the lexer's primary alias.
        """
        try:
            lexer = get_lexer_for_filename(filename, code) if filename else None
        except ClassNotFound:
            lexer = None
        if lexer is None:
            lexer = get_lexer_by_name(FALLBACK_LANGUAGE)
        language = next(iter(lexer.aliases), FALLBACK_LANGUAGE)
        return _tag_languages(highlight(code, lexer, self._formatter), [language])


__all__ = ["DocContentRenderer", "resolve_inline_links"]
