"""Tests for the stage join used between pipeline states."""

from __future__ import annotations

import asyncio

import pytest

from docular.pipeline.stages import run_stage


@pytest.mark.asyncio
async def test_run_stage_waits_for_every_task_to_settle() -> None:
    finished: list[str] = []

    async def _task(name: str, delay: float) -> str:
        await asyncio.sleep(delay)
        finished.append(name)
        return name

    result = await run_stage(
        "demo", [("slow", _task("slow", 0.05)), ("fast", _task("fast", 0))]
    )

    assert finished == ["fast", "slow"], "expected the slow task to finish last"
    assert result.values == ["slow", "fast"], (
        "expected values in scheduling order, not completion order"
    )
    assert result.ok


@pytest.mark.asyncio
async def test_run_stage_collects_failures_without_cancelling_siblings(
    log_messages: list[str],
) -> None:
    finished: list[str] = []

    async def _fail() -> str:
        msg = "disk full"
        raise OSError(msg)

    async def _late() -> str:
        await asyncio.sleep(0.05)
        finished.append("late")
        return "late"

    result = await run_stage("write", [("broken", _fail()), ("late", _late())])

    assert finished == ["late"], "expected the sibling to run to completion"
    assert result.values == ["late"]
    assert not result.ok
    (failure,) = result.failures
    assert (failure.stage, failure.label) == ("write", "broken")
    assert isinstance(failure.error, OSError)
    assert any(
        message.startswith("ERROR|write: broken failed: disk full")
        for message in log_messages
    )
