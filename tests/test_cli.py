"""Tests for the ``docular generate`` command."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from docular import cli
from docular.pipeline import GenerationReport, PipelineState


@pytest.fixture(autouse=True)
def quiet_logging(mocker: typ.Any) -> None:
    """Keep the command from replacing the test's loguru handlers."""
    mocker.patch("docular.cli.configure_logging")


def _write_config(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "core.js").write_text(
        "/**\n * @doc function\n * @name core.run\n * @description Run it.\n */\n",
        encoding="utf-8",
    )
    path = tmp_path / "docular.yaml"
    path.write_text(
        dedent(
            """
            groups:
              - groupId: api
                groupTitle: API
                sections:
                  - id: core
                    title: Core
                    scripts: [src/core.js]
            outputDir: webapp
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return path


def test_generate_writes_webapp_with_bundled_apis(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    cli.generate(config=config_path)

    partial = tmp_path / "webapp" / "documentation" / "partials" / "api" / "core"
    assert (partial / "core.run.html").is_file(), "expected the partial to be written"
    bundle = tmp_path / "webapp" / "resources" / "doc_api_resources" / "doc_api.js"
    assert "window.docular.apis.doc" in bundle.read_text(encoding="utf-8"), (
        "expected the bundled doc api script in the concatenated bundle"
    )


def test_output_dir_option_overrides_config(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    target = tmp_path / "dist"

    cli.generate(config=config_path, output_dir=target)

    assert (target / "index.html").is_file()
    assert not (tmp_path / "webapp").exists()


def test_missing_config_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(config=tmp_path / "absent.yaml")

    assert excinfo.value.code == 1


def test_fatal_pipeline_state_exits_with_error(tmp_path: Path, mocker: typ.Any) -> None:
    config_path = _write_config(tmp_path)
    run = mocker.patch(
        "docular.cli.run_generation",
        return_value=GenerationReport(state=PipelineState.FATAL_API_LOAD_FAILURE),
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.generate(config=config_path)

    assert excinfo.value.code == 1
    run.assert_called_once()


def test_configure_logging_selects_level(mocker: typ.Any) -> None:
    mocker.stopall()
    fake_logger = mocker.patch("docular.cli.logger")

    cli.configure_logging(verbose=True)

    fake_logger.remove.assert_called_once_with()
    assert fake_logger.add.call_args.kwargs["level"] == "DEBUG"
