"""Tests for parsing tagged documentation comment blocks."""

from __future__ import annotations

from textwrap import dedent

from docular.extraction.comment_parser import (
    parse_block,
    parse_doc_blocks,
    parse_doc_file,
)

SCRIPT = dedent(
    """
    /**
     * @ngdoc function
     * @name angular.copy
     * @param {*} source The source
     *   that gets copied.
     * @returns {*} The copy.
     * @description
     * Creates a deep copy.
     *
     * Works with arrays.
     */
    function copy(source) {}

    /* plain comment */

    /**
     * Undocumented helper without tags.
     */
    function helper() {}

    /**
     * @doc object
     * @name calc
     */
    var calc = {};
    """
)


def test_blocks_are_split_and_tagged() -> None:
    blocks = parse_doc_blocks(SCRIPT)

    assert [(block.api_tag, block.doc_type, block.name) for block in blocks] == [
        ("ngdoc", "function", "angular.copy"),
        ("doc", "object", "calc"),
    ], "expected untagged blocks to be skipped"
    first = blocks[0]
    assert first.tags["param"] == ["{*} source The source that gets copied."], (
        "expected continuation lines to extend the previous tag"
    )
    assert first.tags["returns"] == ["{*} The copy."]
    assert first.description == "Creates a deep copy.\n\nWorks with arrays.", (
        f"unexpected description: {first.description!r}"
    )


def test_source_runs_until_the_next_block() -> None:
    blocks = parse_doc_blocks(SCRIPT)

    assert blocks[0].source.startswith("function copy(source) {}"), (
        f"unexpected source: {blocks[0].source!r}"
    )
    assert "function helper" not in blocks[0].source, (
        "expected the source to stop at the next documentation comment"
    )
    assert blocks[1].source.strip() == "var calc = {};"


def test_doc_file_is_one_block() -> None:
    block = parse_doc_file(
        "@doc overview\n@name guide\n@description\n\n# Guide\n\nBody text.\n"
    )

    assert block is not None
    assert (block.api_tag, block.doc_type, block.name) == ("doc", "overview", "guide")
    assert block.description == "# Guide\n\nBody text."


def test_block_without_tags_is_ignored() -> None:
    assert parse_block("Just prose.\nMore prose.") is None


def test_repeated_tags_keep_declaration_order() -> None:
    block = parse_block("@doc function\n@name f\n@param a first\n@param b second")

    assert block is not None
    assert block.tags["param"] == ["a first", "b second"]
