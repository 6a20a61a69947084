"""Tests for ordering and concatenating doc API UI resources."""

from __future__ import annotations

from pathlib import Path

import pytest

from docular.doc_api import DocAPI, UIResources
from docular.pipeline.resources import (
    build_resource_order,
    concatenate_ui_resources,
    order_ui_resources,
)


def _api(
    name: str, root: Path, *, css: tuple[str, ...] = (), js: tuple[str, ...] = ()
) -> DocAPI:
    return DocAPI(
        name=name, identifier=name, ui_resources=UIResources(css=css, js=js), root=root
    )


def test_build_resource_order_keeps_first_rank() -> None:
    assert build_resource_order(["doc", "angular", "doc"]) == {"doc": 0, "angular": 1}


def test_listed_apis_precede_unlisted_ones(tmp_path: Path) -> None:
    apis = {
        "zeta": _api("zeta", tmp_path / "z", js=("z.js",)),
        "angular": _api("angular", tmp_path / "n", css=("n.css",), js=("n.js",)),
        "doc": _api("doc", tmp_path / "d", js=("d1.js", "d2.js")),
        "beta": _api("beta", tmp_path / "b", js=("b.js",)),
    }
    entries = order_ui_resources(apis, ["doc", "angular"])

    assert [(entry.api_name, entry.source_path.name) for entry in entries] == [
        ("doc", "d1.js"),
        ("doc", "d2.js"),
        ("angular", "n.css"),
        ("angular", "n.js"),
        ("zeta", "z.js"),
        ("beta", "b.js"),
    ], "expected priority order first, then discovery order for unlisted apis"


def test_first_listed_api_is_not_demoted(tmp_path: Path) -> None:
    apis = {
        "angular": _api("angular", tmp_path / "n", js=("n.js",)),
        "doc": _api("doc", tmp_path / "d", js=("d.js",)),
    }
    entries = order_ui_resources(apis, ["doc"])

    assert [entry.api_name for entry in entries] == ["doc", "angular"], (
        "expected rank 0 to sort before unlisted apis"
    )


def test_duplicate_files_are_emitted_once(tmp_path: Path) -> None:
    shared = tmp_path / "shared"
    apis = {
        "doc": _api("doc", shared, js=("common.js",)),
        "custom": _api("custom", shared, js=("common.js", "own.js")),
    }
    entries = order_ui_resources(apis, ["doc", "custom"])

    assert [(entry.api_name, entry.source_path.name) for entry in entries] == [
        ("doc", "common.js"),
        ("custom", "own.js"),
    ]


@pytest.mark.asyncio
async def test_concatenation_follows_order_and_skips_missing(
    tmp_path: Path, log_messages: list[str]
) -> None:
    root = tmp_path / "api"
    root.mkdir()
    (root / "a.js").write_text("var a;", encoding="utf-8")
    (root / "b.js").write_text("var b;", encoding="utf-8")
    (root / "a.css").write_text(".a{}", encoding="utf-8")
    apis = {"doc": _api("doc", root, css=("a.css",), js=("b.js", "missing.js", "a.js"))}

    bundles = await concatenate_ui_resources(order_ui_resources(apis, ["doc"]))

    assert bundles.js == "var b; var a;", f"unexpected js bundle: {bundles.js!r}"
    assert bundles.css == ".a{}"
    assert any("missing.js" in message for message in log_messages), (
        "expected the missing resource to be logged"
    )


@pytest.mark.asyncio
async def test_empty_resources_produce_empty_bundles() -> None:
    bundles = await concatenate_ui_resources([])

    assert (bundles.css, bundles.js) == ("", "")
