"""Stage bookkeeping for the generation pipeline.

A stage is a batch of independent coroutines joined by :func:`run_stage`: the
call returns only once every task has settled, successfully or not. Failures
are logged once with the task label and collected, never re-raised, so a
failing task cannot affect its siblings or the stage transition.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

from loguru import logger

T = typ.TypeVar("T")


class PipelineState(enum.Enum):
    """States of one generation run, in execution order."""

    CREATE_DIRS = "create-dirs"
    LOAD_APIS = "load-apis"
    EXTRACT_SECTIONS = "extract-sections"
    CREATE_GROUP_DIRS = "create-group-dirs"
    CREATE_SECTION_DIRS = "create-section-dirs"
    MERGE_DOCS = "merge-docs"
    WRITE_PARTIALS_AND_SUPPORTING_FILES = "write-partials-and-supporting-files"
    ASSEMBLE_WEBAPP = "assemble-webapp"
    REPORT = "report"
    DONE = "done"
    FATAL_API_LOAD_FAILURE = "fatal-api-load-failure"


@dc.dataclass(frozen=True, slots=True)
class TaskFailure:
    """A task that raised, with the label it was scheduled under."""

    stage: str
    label: str
    error: BaseException


@dc.dataclass(slots=True)
class StageResult(typ.Generic[T]):
    """Values of the tasks that succeeded and the failures of those that did not."""

    values: list[T] = dc.field(default_factory=list)
    failures: list[TaskFailure] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no task failed."""
        return not self.failures


def log_section(message: str) -> None:
    """Log a pipeline section banner."""
    logger.info(f"-------- {message} --------")


async def run_stage(
    stage: str, tasks: cabc.Iterable[tuple[str, cabc.Awaitable[T]]]
) -> StageResult[T]:
    """Run labelled awaitables concurrently and wait for all of them to settle.

    Parameters
    ----------
    stage : str
        Stage name used in failure logs.
    tasks : Iterable[tuple[str, Awaitable]]
        ``(label, awaitable)`` pairs. Labels identify the unit of work (for
        example ``"group/section"``) in logs and in :class:`TaskFailure`.

    Returns
    -------
    StageResult
        ``values`` holds the successful results in scheduling order;
        ``failures`` holds one entry per task that raised.
    """
    scheduled = list(tasks)
    outcomes = await asyncio.gather(
        *(awaitable for _, awaitable in scheduled), return_exceptions=True
    )
    result: StageResult[T] = StageResult()
    for (label, _), outcome in zip(scheduled, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            logger.opt(exception=outcome).error(f"{stage}: {label} failed: {outcome}")
            result.failures.append(TaskFailure(stage=stage, label=label, error=outcome))
            continue
        result.values.append(typ.cast("T", outcome))
    return result


__all__ = ["PipelineState", "StageResult", "TaskFailure", "log_section", "run_stage"]
