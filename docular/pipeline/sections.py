"""Extract the doc records of one configured section."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from loguru import logger

from docular.extraction import DocReader, SectionSpec

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docular.config import GroupConfig, SectionConfig
    from docular.doc_api import DocAPI
    from docular.extraction import DocRecord, Extractor


@dc.dataclass(slots=True)
class SectionResult:
    """Records extracted for a section and the doc API they use."""

    group_id: str
    section: SectionConfig
    docs: list[DocRecord]
    api_name: str | None


class SectionProcessor:
    """Delegate one section to the extractor and tag the API it used."""

    def __init__(self, extractor: Extractor | None = None) -> None:
        self.extractor: Extractor = extractor or DocReader()

    async def process(
        self,
        group: GroupConfig,
        section: SectionConfig,
        doc_apis: cabc.Mapping[str, DocAPI],
    ) -> SectionResult:
        """Extract ``section`` and return its records.

        The API name is taken from the first record, since every record of a
        section uses the same API. Extraction errors propagate so the caller's
        join can isolate them.
        """
        logger.info(f"Extracting {group.group_id} Docs For Section \"{section.id}\"...")
        spec = SectionSpec(
            group=group.group_id,
            section=section.id,
            scripts=tuple(section.scripts),
            docs=tuple(section.docs),
            show_source=group.section_show_source(section),
        )
        docs = await self.extractor.collect(spec, doc_apis)
        api_name = docs[0].api_name if docs else None
        return SectionResult(
            group_id=group.group_id, section=section, docs=docs, api_name=api_name
        )


__all__ = ["SectionProcessor", "SectionResult"]
