"""Staged generation pipeline: extraction, merging, and webapp assembly."""

from .merge import DocMergeError, merge_docs, resolve_identifier_collisions
from .orchestrator import (
    DocumentationPipeline,
    GenerationReport,
    generate,
    generate_async,
)
from .resources import (
    ConcatenatedResources,
    UIResourceEntry,
    concatenate_ui_resources,
    order_ui_resources,
)
from .sections import SectionProcessor, SectionResult
from .stages import PipelineState, StageResult, TaskFailure, run_stage

__all__ = [
    "ConcatenatedResources",
    "DocMergeError",
    "DocumentationPipeline",
    "GenerationReport",
    "PipelineState",
    "SectionProcessor",
    "SectionResult",
    "StageResult",
    "TaskFailure",
    "UIResourceEntry",
    "concatenate_ui_resources",
    "generate",
    "generate_async",
    "merge_docs",
    "order_ui_resources",
    "resolve_identifier_collisions",
    "run_stage",
]
