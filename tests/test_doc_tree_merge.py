"""Tests for nesting child docs under their parents and id rewriting."""

from __future__ import annotations

import collections.abc as cabc

import pytest

from docular.extraction import DocRecord
from docular.pipeline.merge import (
    DocMergeError,
    find_case_collisions,
    merge_docs,
    resolve_identifier_collisions,
    rewrite_identifier,
)

DocFactory = cabc.Callable[..., DocRecord]


def _ids(docs: cabc.Iterable[DocRecord]) -> list[str]:
    return [doc.id for doc in docs]


def test_children_nest_under_nearest_ancestor(make_doc: DocFactory) -> None:
    docs = [
        make_doc("a.b.c"),
        make_doc("a"),
        make_doc("a.x.y"),
        make_doc("a.b"),
        make_doc("z"),
    ]
    roots = merge_docs(docs)

    assert _ids(roots) == ["a", "z"]
    a = roots[0]
    assert _ids(a.children) == ["a.b", "a.x.y"], (
        "expected a.x.y to fall back to a when a.x is absent"
    )
    assert _ids(a.children[0].children) == ["a.b.c"]
    assert a.children[1].parent_id == "a"
    assert a.parent_id is None


def test_every_doc_appears_exactly_once(make_doc: DocFactory) -> None:
    docs = [make_doc(doc_id) for doc_id in ("m", "m.a", "m.a.b", "m.c", "n.a", "n")]
    roots = merge_docs(docs)

    seen = [doc.id for root in roots for doc in root.walk()]
    assert sorted(seen) == sorted(_ids(docs)), "expected no doc lost or duplicated"


def test_merge_spans_sections_and_sorts_roots(make_doc: DocFactory) -> None:
    docs = [
        make_doc("b", section="two"),
        make_doc("a.child", section="two"),
        make_doc("a", section="one"),
    ]
    roots = merge_docs(docs)

    assert [(doc.section, doc.id) for doc in roots] == [("one", "a"), ("two", "b")]
    assert _ids(roots[0].children) == ["a.child"]


def test_invalid_ids_leave_input_untouched(make_doc: DocFactory) -> None:
    parent = make_doc("a")
    docs = [parent, make_doc("a.b"), make_doc("a..c")]

    with pytest.raises(DocMergeError, match="empty path segment"):
        merge_docs(docs)
    assert parent.children == [], "expected validation before any mutation"


@pytest.mark.parametrize(
    ("doc_id", "expected"),
    [
        ("angular.Module", "angular.IModule"),
        ("angular.Module.controller", "angular.IModule.controller"),
        ("angular.Module#config", "angular.IModule#config"),
        ("angular.Modules", "angular.Modules"),
        ("angular.module", "angular.module"),
    ],
)
def test_rewrite_identifier_matches_segment_boundaries(
    doc_id: str, expected: str
) -> None:
    assert rewrite_identifier(doc_id, {"angular.Module": "angular.IModule"}) == expected


def test_resolve_collisions_renames_and_reports(
    make_doc: DocFactory, log_messages: list[str]
) -> None:
    lower = make_doc("angular.module")
    upper = make_doc("angular.Module")
    docs = [lower, upper, make_doc("lib.Thing"), make_doc("lib.thing")]

    rewritten = resolve_identifier_collisions(docs, {"angular.Module": "angular.IModule"})

    assert rewritten == [upper]
    assert upper.id == "angular.IModule"
    assert lower.id == "angular.module"
    assert [_ids(group) for group in find_case_collisions(docs)] == [
        ["lib.Thing", "lib.thing"]
    ]
    assert any(
        message.startswith("WARNING|") and "lib.Thing, lib.thing" in message
        for message in log_messages
    ), "expected leftover case collisions to be reported"
