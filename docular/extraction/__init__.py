"""Extraction collaborators: comment parsing, doc records, and partial rendering."""

from .models import DocExtractionError, DocRecord, Extractor, SectionSpec
from .partials import PartialRenderer
from .reader import DocReader
from .renderer import DocContentRenderer

__all__ = [
    "DocContentRenderer",
    "DocExtractionError",
    "DocReader",
    "DocRecord",
    "Extractor",
    "PartialRenderer",
    "SectionSpec",
]
