r"""Parse ``/** ... */`` documentation blocks into structured tag data.

A block is documentation when its first tag line names a doc API identifier,
for example ``@doc function``. The value of that first tag is the entity
type; ``@name`` carries the identifier; every other ``@tag`` line is kept
verbatim. Untagged text and ``@description`` values form the Markdown body.

Example
-------
>>> from docular.extraction.comment_parser import parse_doc_blocks
>>> blocks = parse_doc_blocks("/**\n * @doc function\n * @name a.b\n * @description Hi.\n */\nfn();")
>>> blocks[0].api_tag, blocks[0].doc_type, blocks[0].name
('doc', 'function', 'a.b')
"""

from __future__ import annotations

import dataclasses as dc
import re

DOC_COMMENT_PATTERN = re.compile(r"/\*\*(.*?)\*/", re.DOTALL)
COMMENT_PREFIX_PATTERN = re.compile(r"^[ \t]*\*[ ]?", re.MULTILINE)
TAG_PATTERN = re.compile(r"^@([A-Za-z_][\w-]*)[ \t]*(.*)$")
DESCRIPTION_TAG = "description"
NAME_TAG = "name"


@dc.dataclass(slots=True)
class DocBlock:
    """One tagged documentation block.

    Attributes
    ----------
    api_tag : str
        Name of the first tag; selects the doc API by identifier.
    doc_type : str
        Value of the first tag (``function``, ``overview``...).
    tags : dict[str, list[str]]
        Remaining tags, in declaration order per tag name.
    description : str
        Markdown body assembled from untagged text and ``@description``.
    source : str
        Code between the end of the block and the next block.
    """

    api_tag: str
    doc_type: str
    tags: dict[str, list[str]]
    description: str
    source: str = ""

    @property
    def name(self) -> str | None:
        """Return the ``@name`` value, if any."""
        values = self.tags.get(NAME_TAG)
        return values[0] if values else None


def _strip_comment_prefix(body: str) -> str:
    """Remove the leading `` * `` gutter from each comment line."""
    return COMMENT_PREFIX_PATTERN.sub("", body)


def parse_block(text: str) -> DocBlock | None:
    """Parse the body of a single block; return None when it has no tags."""
    first: tuple[str, str] | None = None
    tags: dict[str, list[str]] = {}
    description: list[str] = []
    # continuation lines extend the last tag; None means the description
    current_tag: str | None = None

    for line in text.strip("\n").splitlines():
        match = TAG_PATTERN.match(line.strip())
        if match is None:
            if current_tag is None:
                description.append(line)
            elif continuation := line.strip():
                previous = tags[current_tag][-1]
                tags[current_tag][-1] = (
                    f"{previous} {continuation}" if previous else continuation
                )
            continue
        tag, value = match.group(1), match.group(2).strip()
        if first is None:
            first = (tag, value)
            current_tag = None
        elif tag == DESCRIPTION_TAG:
            current_tag = None
            if value:
                description.append(value)
        else:
            tags.setdefault(tag, []).append(value)
            current_tag = tag

    if first is None:
        return None
    return DocBlock(
        api_tag=first[0],
        doc_type=first[1],
        tags=tags,
        description="\n".join(description).strip(),
    )


def parse_doc_blocks(text: str) -> list[DocBlock]:
    """Return every tagged ``/** ... */`` block found in script ``text``.

    The code following each block, up to the next documentation comment, is
    attached as :attr:`DocBlock.source`.
    """
    matches = list(DOC_COMMENT_PATTERN.finditer(text))
    blocks: list[DocBlock] = []
    for idx, match in enumerate(matches):
        block = parse_block(_strip_comment_prefix(match.group(1)))
        if block is None:
            continue
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        block.source = text[match.end() : end].strip("\n")
        blocks.append(block)
    return blocks


def parse_doc_file(text: str) -> DocBlock | None:
    """Parse a stand-alone documentation file as a single block."""
    return parse_block(text)


__all__ = [
    "DOC_COMMENT_PATTERN",
    "DocBlock",
    "parse_block",
    "parse_doc_blocks",
    "parse_doc_file",
]
