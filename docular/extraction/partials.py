"""Render doc records into partial HTML fragments with Jinja templates."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from docular._constants import TEMPLATES_DIR

from .renderer import DocContentRenderer

if typ.TYPE_CHECKING:
    from .models import DocRecord

PARTIAL_TEMPLATE = "doc_partial.jinja"


class PartialRenderer:
    """Render a record and its nested children into one HTML fragment.

    Instances are callables so they can be attached to records as their
    ``renderer``. Rendering is deterministic: the same record tree always
    yields the same markup.
    """

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        content_renderer: DocContentRenderer | None = None,
    ) -> None:
        """Initialize the Jinja environment and Markdown renderer.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``doc_partial.jinja``; defaults to the
            package templates.
        content_renderer : DocContentRenderer, optional
            Renderer used for descriptions and source listings.
        """
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.content = content_renderer or DocContentRenderer()
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(PARTIAL_TEMPLATE)

    def __call__(self, record: DocRecord) -> str:
        """Return the partial HTML for ``record``."""
        html = self.template.render(doc=self._context(record))
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _context(self, record: DocRecord) -> dict[str, typ.Any]:
        """Build the template context for ``record`` and its descendants."""
        source_html = ""
        if record.source:
            filename = record.source_path.name if record.source_path else None
            source_html = self.content.code_block(record.source, filename=filename)
        return {
            "id": record.id,
            "name": record.name,
            "type": record.doc_type,
            "api": record.api_name,
            "api_title": record.doc_api.title,
            "description_html": Markup(self.content.markdown(record.description)),
            "tags": sorted(record.tags.items()),
            "source_html": Markup(source_html),
            "source_path": record.source_path.name if record.source_path else None,
            "children": [self._context(child) for child in record.children],
        }


__all__ = ["PARTIAL_TEMPLATE", "PartialRenderer"]
