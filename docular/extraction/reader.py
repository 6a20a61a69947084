"""Collect doc records from a section's scripts and documentation files.

:class:`DocReader` is the default extractor. It reads every script and doc
file of a section concurrently, parses the tagged comment blocks, selects the
doc API whose ``identifier`` matches each block's first tag, and builds
:class:`~docular.extraction.models.DocRecord` objects that render through a
shared :class:`~docular.extraction.partials.PartialRenderer`.

Example
-------
>>> import asyncio
>>> from pathlib import Path
>>> from docular.extraction import DocReader, SectionSpec
>>> spec = SectionSpec(group="api", section="core", scripts=(Path("core.js"),))
>>> records = asyncio.run(DocReader().collect(spec, doc_apis))  # doctest: +SKIP
>>> [record.id for record in records]  # doctest: +SKIP
['core', 'core.start']
"""

from __future__ import annotations

import asyncio
import typing as typ

from loguru import logger

from docular import writer

from .comment_parser import DocBlock, parse_doc_blocks, parse_doc_file
from .models import DocExtractionError, DocRecord, SectionSpec
from .partials import PartialRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from docular.doc_api import DocAPI


class DocReader:
    """Default extractor turning tagged comment blocks into doc records."""

    def __init__(self, *, renderer: PartialRenderer | None = None) -> None:
        self._renderer = renderer

    @property
    def renderer(self) -> PartialRenderer:
        """Return the partial renderer, building the Jinja environment lazily."""
        if self._renderer is None:
            self._renderer = PartialRenderer()
        return self._renderer

    async def collect(
        self, spec: SectionSpec, doc_apis: cabc.Mapping[str, DocAPI]
    ) -> list[DocRecord]:
        """Return the records documented by ``spec``'s files.

        Parameters
        ----------
        spec : SectionSpec
            Group/section ids, the files to read, and the show-source flag.
        doc_apis : Mapping[str, DocAPI]
            Loaded doc APIs; a block is kept only when its first tag matches
            one of their identifiers.

        Returns
        -------
        list[DocRecord]
            Records in file order. Scripts come before doc files.

        Raises
        ------
        DocExtractionError
            If a file cannot be read or the section mixes doc APIs.
        """
        by_identifier = {api.identifier: api for api in doc_apis.values()}
        paths = [*spec.scripts, *spec.docs]
        texts = await asyncio.gather(
            *(writer.read_text(path) for path in paths), return_exceptions=True
        )
        for path, text in zip(paths, texts, strict=True):
            if isinstance(text, BaseException):
                msg = f"Unable to read {path}: {text}"
                raise DocExtractionError(msg) from text

        records: list[DocRecord] = []
        script_count = len(spec.scripts)
        for index, (path, text) in enumerate(zip(paths, texts, strict=True)):
            if index < script_count:
                blocks = parse_doc_blocks(typ.cast("str", text))
            else:
                block = parse_doc_file(typ.cast("str", text))
                blocks = [block] if block else []
            for block in blocks:
                record = self._build_record(block, spec, by_identifier, path)
                if record is not None:
                    records.append(record)

        api_names = {record.api_name for record in records}
        if len(api_names) > 1:
            names = ", ".join(sorted(api_names))
            msg = f"Section '{spec.group}/{spec.section}' mixes doc apis: {names}"
            raise DocExtractionError(msg)
        return records

    def _build_record(
        self,
        block: DocBlock,
        spec: SectionSpec,
        by_identifier: cabc.Mapping[str, DocAPI],
        path: Path,
    ) -> DocRecord | None:
        """Build a record for ``block`` or return None when it cannot be used."""
        doc_api = by_identifier.get(block.api_tag)
        if doc_api is None:
            logger.debug(f"Skipping @{block.api_tag} block in {path}: no matching doc api")
            return None
        doc_id = block.name
        if not doc_id:
            logger.warning(f"Skipping @{block.api_tag} block without @name in {path}")
            return None
        tags = dict(block.tags)
        tags.pop("name", None)
        return DocRecord(
            id=doc_id,
            name=doc_id.rsplit(".", 1)[-1],
            doc_type=block.doc_type,
            group=spec.group,
            section=spec.section,
            doc_api=doc_api,
            description=block.description,
            tags=tags,
            source=(block.source or None) if spec.show_source else None,
            source_path=path,
            renderer=self.renderer,
        )


__all__ = ["DocReader"]
