"""Behaviour tests for generating a documentation webapp with pytest-bdd.

The scenarios run the full pipeline against the bundled Angular default
group, whose sources declare both ``angular.module`` and ``angular.Module``.
They check that the case-clashing id is rewritten before partials are
written and that its methods are nested under the renamed parent. A second
scenario points the pipeline at a plugin folder without the base ``doc`` API
and checks that the run stops before any section is extracted.

Usage:
    pytest tests/bdd/test_generate_site.py -v
"""

from __future__ import annotations

import asyncio
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from docular.config import load_docular_config
from docular.pipeline import DocumentationPipeline, PipelineState

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "generate_site.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


@given("a docular config that shows the bundled Angular docs")
def given_angular_config(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a ``docular.yaml`` that only enables the bundled Angular group."""
    config_path = tmp_path / "docular.yaml"
    config_path.write_text(
        "groups: []\nshowAngularDocs: true\noutputDir: webapp\n", encoding="utf-8"
    )
    scenario_state["config"] = load_docular_config(config_path)
    scenario_state["doc_api_paths"] = None


@given("only a plugin folder without the base doc API")
def given_plugins_without_base(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Create a plugin search path holding only an extension plugin."""
    plugin = tmp_path / "plugins" / "docular-doc-api-angular"
    plugin.mkdir(parents=True)
    (plugin / "api.py").write_text('DOC_API = {"identifier": "ngdoc"}\n', encoding="utf-8")
    scenario_state["doc_api_paths"] = [tmp_path / "plugins"]


@when("I generate the documentation site")
def when_generate(scenario_state: ScenarioState) -> None:
    """Run the pipeline and keep its report."""
    pipeline = DocumentationPipeline(
        scenario_state["config"], doc_api_paths=scenario_state["doc_api_paths"]
    )
    scenario_state["report"] = asyncio.run(pipeline.run())


@then("the generation completes")
def then_completes(scenario_state: ScenarioState) -> None:
    """Verify the pipeline reached its final state without failures."""
    report = scenario_state["report"]
    assert report.state is PipelineState.DONE, f"unexpected state {report.state}"
    assert report.failures == [], f"unexpected failures: {report.failures}"


def _partials_dir(scenario_state: ScenarioState) -> Path:
    return (
        scenario_state["config"].output_dir
        / "documentation"
        / "partials"
        / "angular"
        / "angular_api"
    )


@then("the Angular module interface is written as angular.IModule")
def then_interface_renamed(scenario_state: ScenarioState) -> None:
    """Verify both module docs have distinct partial files."""
    names = sorted(path.name for path in _partials_dir(scenario_state).iterdir())
    assert "angular.IModule.html" in names, f"expected renamed partial, got {names}"
    assert "angular.module.html" in names, f"expected function partial, got {names}"
    assert "angular.Module.html" not in names


@then("the module method is nested under the renamed interface")
def then_method_nested(scenario_state: ScenarioState) -> None:
    """Verify the controller method renders inside the interface partial."""
    partial = _partials_dir(scenario_state) / "angular.IModule.html"
    soup = BeautifulSoup(partial.read_text(encoding="utf-8"), "html.parser")
    assert soup.select_one("section[id='angular.IModule.controller']") is not None, (
        "expected angular.IModule.controller nested in the interface partial"
    )
    metadata = scenario_state["config"].output_dir / "documentation" / "docs-metadata.js"
    text = metadata.read_text(encoding="utf-8")
    entries = msgspec_json.decode(text[len("DOC_DATA=") : -1])
    interface = next(entry for entry in entries if entry["id"] == "angular.IModule")
    assert interface["children"] == ["angular.IModule.controller"]


@then("the generation is aborted before extraction")
def then_aborted(scenario_state: ScenarioState) -> None:
    """Verify the fatal state and that no group directory was created."""
    report = scenario_state["report"]
    assert report.state is PipelineState.FATAL_API_LOAD_FAILURE
    partials = scenario_state["config"].output_dir / "documentation" / "partials"
    assert list(partials.iterdir()) == [], "expected no group directories"
