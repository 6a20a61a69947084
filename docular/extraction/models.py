"""Shared dataclasses exchanged between extraction and the pipeline."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docular.doc_api import DocAPI


class DocExtractionError(RuntimeError):
    """Raised when a section's sources cannot be turned into doc records."""


@dc.dataclass(frozen=True, slots=True)
class SectionSpec:
    """Everything the extractor needs to know about one section."""

    group: str
    section: str
    scripts: tuple[Path, ...] = ()
    docs: tuple[Path, ...] = ()
    show_source: bool = False


@dc.dataclass(slots=True, eq=False)
class DocRecord:
    """A single documented entity.

    Attributes
    ----------
    id : str
        Dotted identifier (``module.Class.method``); also the partial filename.
    name : str
        Display name, usually the last identifier segment.
    doc_type : str
        Kind of entity (``function``, ``object``, ``overview``...).
    group : str
        Owning group id.
    section : str
        Owning section id.
    doc_api : DocAPI
        API that extracted the record.
    description : str
        Markdown body.
    tags : dict[str, list[str]]
        Remaining ``@tag value`` lines, grouped by tag name.
    source : str or None
        Code that follows the documentation block when source display is on.
    source_path : Path or None
        File the record came from.
    parent_id : str or None
        Id of the record this one is nested under after the tree merge.
    children : list[DocRecord]
        Nested records, ordered by id.
    """

    id: str
    name: str
    doc_type: str
    group: str
    section: str
    doc_api: DocAPI
    description: str = ""
    tags: dict[str, list[str]] = dc.field(default_factory=dict)
    source: str | None = None
    source_path: Path | None = None
    parent_id: str | None = None
    children: list[DocRecord] = dc.field(default_factory=list)
    renderer: cabc.Callable[[DocRecord], str] | None = dc.field(
        default=None, repr=False
    )

    @property
    def api_name(self) -> str:
        """Return the name of the doc API that produced the record."""
        return self.doc_api.name

    @property
    def short_description(self) -> str:
        """Return the first paragraph of the description as plain text."""
        first = self.description.strip().split("\n\n", 1)[0]
        return " ".join(first.split())

    def html(self) -> str:
        """Render the record, children included, into its partial HTML body."""
        if self.renderer is None:
            msg = f"Doc '{self.id}' has no renderer attached."
            raise DocExtractionError(msg)
        return self.renderer(self)

    def walk(self) -> cabc.Iterator[DocRecord]:
        """Yield the record and then every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class Extractor(typ.Protocol):
    """Turn one section's sources into doc records."""

    async def collect(
        self, spec: SectionSpec, doc_apis: cabc.Mapping[str, DocAPI]
    ) -> list[DocRecord]:
        """Return the records documented by ``spec``'s scripts and docs."""
        ...


__all__ = ["DocExtractionError", "DocRecord", "Extractor", "SectionSpec"]
