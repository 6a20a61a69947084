"""High-level orchestration for documentation site generation.

:class:`DocumentationPipeline` drives one generation run through a fixed
sequence of stages (see :class:`~docular.pipeline.stages.PipelineState`).
Inside a stage every task runs concurrently on the event loop; the stage is a
hard join, so a later stage never starts while a task of an earlier one is
still pending. Failures of individual tasks are logged and dropped; only a
missing base doc API stops the run, before any section is extracted.

Example
-------
>>> from pathlib import Path
>>> from docular.config import load_docular_config
>>> from docular.pipeline import generate
>>> config = load_docular_config(Path("docular.yaml"))  # doctest: +SKIP
>>> report = generate(config)  # doctest: +SKIP
>>> report.state  # doctest: +SKIP
<PipelineState.DONE: 'done'>
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import time
import typing as typ
from pathlib import Path

from loguru import logger

from docular import writer
from docular._constants import (
    BUNDLED_DOC_APIS_DIR,
    CONFIGURATION_SCRIPT_FILE,
    DOC_API_RESOURCES_DIR,
    DOCS_METADATA_FILE,
    DOCS_METADATA_VAR,
    GROUPS_METADATA_FILE,
    GROUPS_METADATA_VAR,
    INDEX_TEMPLATE,
    LAYOUT_METADATA_FILE,
    LAYOUT_METADATA_VAR,
    PARTIALS_DIR,
    SOURCE_DIR,
    TEMPLATES_DIR,
    WEBAPP_PARTIAL_NAMES,
    WEBAPP_PARTIALS_DIR,
)
from docular.doc_api import MissingBaseDocAPIError, load_doc_apis

from .merge import merge_docs, resolve_identifier_collisions
from .resources import concatenate_ui_resources, order_ui_resources
from .sections import SectionProcessor, SectionResult
from .stages import PipelineState, StageResult, TaskFailure, log_section, run_stage
from .supporting_files import (
    configuration_script,
    docs_metadata,
    format_assignment,
    groups_metadata,
    layout_metadata,
)

if typ.TYPE_CHECKING:
    from docular.config import DocularConfig
    from docular.doc_api import DocAPI
    from docular.extraction import DocRecord, Extractor

T = typ.TypeVar("T")


@dc.dataclass(slots=True)
class GenerationReport:
    """Summary of a generation run."""

    state: PipelineState
    doc_count: int = 0
    elapsed: float = 0.0
    failures: list[TaskFailure] = dc.field(default_factory=list)

    @property
    def partials_per_second(self) -> int:
        """Return the rounded partial throughput of the run."""
        if self.elapsed <= 0:
            return self.doc_count
        return round(self.doc_count / self.elapsed)


class DocumentationPipeline:
    """Run the staged generation workflow for one configuration."""

    def __init__(
        self,
        config: DocularConfig,
        *,
        extractor: Extractor | None = None,
        doc_api_paths: cabc.Sequence[Path] | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the pipeline.

        Parameters
        ----------
        config : DocularConfig
            Resolved configuration; ``output_dir`` is the webapp root.
        extractor : Extractor, optional
            Extraction collaborator; defaults to
            :class:`~docular.extraction.DocReader`.
        doc_api_paths : Sequence[Path], optional
            Plugin search directories. Defaults to the bundled plugins
            followed by ``config.doc_api_paths``.
        templates_dir : Path, optional
            Directory holding ``index.html`` and the default webapp partials.
        """
        self.config = config
        self.output_dir = config.output_dir
        self.section_processor = SectionProcessor(extractor)
        self.doc_api_paths = list(
            doc_api_paths
            if doc_api_paths is not None
            else [BUNDLED_DOC_APIS_DIR, *config.doc_api_paths]
        )
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.state = PipelineState.CREATE_DIRS
        self.doc_apis: dict[str, DocAPI] = {}
        self.docs: list[DocRecord] = []
        self.failures: list[TaskFailure] = []

    async def run(self) -> GenerationReport:
        """Execute every stage and return the run summary.

        Returns
        -------
        GenerationReport
            ``state`` is :attr:`PipelineState.DONE` unless the base doc API
            could not be loaded, in which case it is
            :attr:`PipelineState.FATAL_API_LOAD_FAILURE` and nothing after
            the API load has run.
        """
        start = time.perf_counter()

        self._enter(PipelineState.CREATE_DIRS)
        await self._create_output_dirs()

        self._enter(PipelineState.LOAD_APIS)
        try:
            self.doc_apis = await load_doc_apis(self.doc_api_paths)
        except MissingBaseDocAPIError as exc:
            logger.critical(f"FATAL ERROR: {exc}")
            self._enter(PipelineState.FATAL_API_LOAD_FAILURE)
            return self._report(start)

        self._enter(PipelineState.EXTRACT_SECTIONS)
        self.docs = await self._extract_sections()

        self._enter(PipelineState.CREATE_GROUP_DIRS)
        await self._create_group_dirs()

        self._enter(PipelineState.CREATE_SECTION_DIRS)
        await self._create_section_dirs()

        self._enter(PipelineState.MERGE_DOCS)
        self.docs = self._merge_docs(self.docs)

        self._enter(PipelineState.WRITE_PARTIALS_AND_SUPPORTING_FILES)
        await self._write_partials_and_supporting_files()

        self._enter(PipelineState.ASSEMBLE_WEBAPP)
        await self._assemble_webapp()

        self._enter(PipelineState.REPORT)
        report = self._report(start)
        log_section("generating report")
        logger.info(
            f"DONE! Generated {report.doc_count} pages in "
            f"{round(report.elapsed * 1000)} ms. "
            f"Partials per second : {report.partials_per_second}"
        )
        self._enter(PipelineState.DONE)
        report.state = self.state
        return report

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"pipeline state: {self.state.value} -> {state.value}")
        self.state = state

    def _report(self, start: float) -> GenerationReport:
        return GenerationReport(
            state=self.state,
            doc_count=len(self.docs),
            elapsed=time.perf_counter() - start,
            failures=list(self.failures),
        )

    async def _stage(
        self, stage: str, tasks: cabc.Iterable[tuple[str, cabc.Awaitable[T]]]
    ) -> StageResult[T]:
        result = await run_stage(stage, tasks)
        self.failures.extend(result.failures)
        return result

    def _path(self, relative: Path | str) -> Path:
        return self.output_dir / relative

    async def _create_output_dirs(self) -> None:
        directories = (PARTIALS_DIR, WEBAPP_PARTIALS_DIR, SOURCE_DIR)
        await self._stage(
            "create directories",
            (
                (str(directory), writer.make_dir(self._path(directory)))
                for directory in directories
            ),
        )

    async def _extract_sections(self) -> list[DocRecord]:
        log_section("generating Docs")
        result: StageResult[SectionResult] = await self._stage(
            "extract sections",
            (
                (
                    f"{group.group_id}/{section.id}",
                    self.section_processor.process(group, section, self.doc_apis),
                )
                for group, section in self.config.iter_sections()
            ),
        )
        docs: list[DocRecord] = []
        for section_result in result.values:
            if section_result.api_name:
                section_result.section.doc_api = section_result.api_name
            docs.extend(section_result.docs)
        return docs

    def _group_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for group, _section in self.config.iter_sections():
            seen.setdefault(group.group_id, None)
        return list(seen)

    async def _create_group_dirs(self) -> None:
        log_section("generating partials directories for groups")
        await self._stage(
            "create group directories",
            (
                (group_id, writer.make_dir(self._path(PARTIALS_DIR / group_id)))
                for group_id in self._group_ids()
            ),
        )

    async def _create_section_dirs(self) -> None:
        log_section("generating partials directories for sections")
        await self._stage(
            "create section directories",
            (
                (
                    f"{group.group_id}/{section.id}",
                    writer.make_dir(
                        self._path(PARTIALS_DIR / group.group_id / section.id)
                    ),
                )
                for group, section in self.config.iter_sections()
            ),
        )

    def _merge_docs(self, docs: list[DocRecord]) -> list[DocRecord]:
        log_section("merging child Docs with parent Docs")
        try:
            resolve_identifier_collisions(docs, self.config.id_rewrites)
            return merge_docs(docs)
        except Exception as exc:  # noqa: BLE001
            logger.opt(exception=exc).error(f"ERROR: merging child docs: {exc}")
            self.failures.append(TaskFailure(stage="merge docs", label="merge", error=exc))
            return docs

    def partial_path(self, doc: DocRecord) -> Path:
        """Return the partial file written for ``doc``."""
        return self._path(PARTIALS_DIR / doc.group / doc.section / f"{doc.id}.html")

    async def _write_partial(self, doc: DocRecord) -> None:
        await writer.output(self.partial_path(doc), doc.html())

    async def _copy_webapp_partial(self, source: Path, name: str) -> None:
        content = await writer.read_bytes(source)
        await writer.output(self._path(WEBAPP_PARTIALS_DIR / f"{name}.html"), content)

    def webapp_partial_sources(self) -> dict[str, Path]:
        """Return the source file of each webapp partial, configured or bundled."""
        configured = {
            "docular_partial_home": self.config.docular_partial_home,
            "docular_partial_group_index": self.config.docular_partial_group_index,
        }
        return {
            name: configured[name] or self.templates_dir / f"{name}.html"
            for name in WEBAPP_PARTIAL_NAMES
        }

    async def _write_partials_and_supporting_files(self) -> None:
        log_section("generating partials")
        tasks: list[tuple[str, cabc.Awaitable[None]]] = [
            (f"partial {doc.group}/{doc.section}/{doc.id}", self._write_partial(doc))
            for doc in self.docs
        ]

        log_section("generating supporting files")
        metadata_files = (
            (DOCS_METADATA_FILE, DOCS_METADATA_VAR, docs_metadata(self.docs)),
            (GROUPS_METADATA_FILE, GROUPS_METADATA_VAR, groups_metadata(self.config.groups)),
            (LAYOUT_METADATA_FILE, LAYOUT_METADATA_VAR, layout_metadata(self.doc_apis)),
        )
        for relative, variable, payload in metadata_files:
            tasks.append(
                (
                    str(relative),
                    writer.output(self._path(relative), format_assignment(variable, payload)),
                )
            )
        tasks.append(
            (
                str(CONFIGURATION_SCRIPT_FILE),
                writer.output(
                    self._path(CONFIGURATION_SCRIPT_FILE),
                    configuration_script(self.config),
                ),
            )
        )
        for name, source in self.webapp_partial_sources().items():
            tasks.append((f"webapp partial {name}", self._copy_webapp_partial(source, name)))

        await self._stage("write partials and supporting files", tasks)

    async def _copy_index(self) -> None:
        content = await writer.read_bytes(self.templates_dir / INDEX_TEMPLATE)
        await writer.output(self._path(INDEX_TEMPLATE), content)

    async def _assemble_webapp(self) -> None:
        log_section("generating index.html page")
        await self._stage("copy index", [(INDEX_TEMPLATE, self._copy_index())])

        log_section("ordering and concatenating doc_api css and js")
        entries = order_ui_resources(self.doc_apis, self.config.doc_api_order)
        bundles = await concatenate_ui_resources(entries)
        resources_dir = self._path(DOC_API_RESOURCES_DIR)
        created = await self._stage(
            "create resource directory",
            [(str(DOC_API_RESOURCES_DIR), writer.make_dir(resources_dir))],
        )
        if not created.ok:
            return
        await self._stage(
            "write ui resources",
            [
                ("doc_api.js", writer.output(resources_dir / "doc_api.js", bundles.js)),
                ("doc_api.css", writer.output(resources_dir / "doc_api.css", bundles.css)),
            ],
        )


async def generate_async(
    config: DocularConfig,
    *,
    extractor: Extractor | None = None,
    doc_api_paths: cabc.Sequence[Path] | None = None,
) -> GenerationReport:
    """Run a :class:`DocumentationPipeline` on the current event loop."""
    pipeline = DocumentationPipeline(
        config, extractor=extractor, doc_api_paths=doc_api_paths
    )
    return await pipeline.run()


def generate(
    config: DocularConfig,
    *,
    extractor: Extractor | None = None,
    doc_api_paths: cabc.Sequence[Path] | None = None,
) -> GenerationReport:
    """Run a full generation on a fresh event loop and return its report."""
    return asyncio.run(
        generate_async(config, extractor=extractor, doc_api_paths=doc_api_paths)
    )


__all__ = ["DocumentationPipeline", "GenerationReport", "generate", "generate_async"]
