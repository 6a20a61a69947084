"""Nest child doc records under their parents by dotted identifier.

Two steps run before partials are written:

1. :func:`resolve_identifier_collisions` applies an explicit id rewrite table.
   Partials are written to ``<group>/<section>/<id>.html``, and on
   case-insensitive file systems ``angular.module`` and ``angular.Module``
   would land in the same file, so the default table renames the latter to
   ``angular.IModule``. Remaining case-insensitive clashes are reported.
2. :func:`merge_docs` turns the flat list into a forest: ``a.b`` is the
   parent of ``a.b.c`` and, when no ``a.b`` exists, ``a`` is.

Example
-------
>>> from docular.pipeline.merge import rewrite_identifier
>>> rewrite_identifier("angular.Module#config", {"angular.Module": "angular.IModule"})
'angular.IModule#config'
"""

from __future__ import annotations

import collections
import collections.abc as cabc
import typing as typ

from loguru import logger

if typ.TYPE_CHECKING:
    from docular.extraction import DocRecord

ID_SEPARATOR = "."
REWRITE_BOUNDARIES = (".", "#", ":")


class DocMergeError(ValueError):
    """Raised when doc identifiers cannot be arranged into a tree."""


def rewrite_identifier(doc_id: str, rewrites: cabc.Mapping[str, str]) -> str:
    """Return ``doc_id`` with the first matching rewrite applied.

    A rewrite key matches the whole id or an id prefix that ends at one of
    ``.``, ``#`` or ``:``; ``angular.Modules`` is therefore left alone by the
    ``angular.Module`` rule.
    """
    for old, new in rewrites.items():
        if doc_id == old:
            return new
        if doc_id.startswith(old) and doc_id[len(old)] in REWRITE_BOUNDARIES:
            return new + doc_id[len(old) :]
    return doc_id


def find_case_collisions(docs: cabc.Iterable[DocRecord]) -> list[list[DocRecord]]:
    """Return groups of distinct ids that share a partial file path ignoring case."""
    by_path: dict[tuple[str, str, str], list[DocRecord]] = collections.defaultdict(list)
    for doc in docs:
        by_path[(doc.group, doc.section, doc.id.casefold())].append(doc)
    return [
        clashing
        for clashing in by_path.values()
        if len({doc.id for doc in clashing}) > 1
    ]


def resolve_identifier_collisions(
    docs: cabc.Sequence[DocRecord], rewrites: cabc.Mapping[str, str]
) -> list[DocRecord]:
    """Apply ``rewrites`` to every doc id in place and report leftover clashes.

    Returns
    -------
    list[DocRecord]
        The records whose id was rewritten.
    """
    rewritten: list[DocRecord] = []
    for doc in docs:
        new_id = rewrite_identifier(doc.id, rewrites)
        if new_id != doc.id:
            logger.debug(f"Renamed doc id {doc.id} -> {new_id}")
            doc.id = new_id
            rewritten.append(doc)
    for clashing in find_case_collisions(docs):
        ids = ", ".join(sorted({doc.id for doc in clashing}))
        first = clashing[0]
        logger.warning(
            f"Doc ids {ids} in {first.group}/{first.section} differ only by case "
            "and will share a partial file on case-insensitive file systems"
        )
    return rewritten


def _id_path(doc: DocRecord) -> tuple[str, ...]:
    if not isinstance(doc.id, str) or not doc.id:
        msg = f"Doc in {doc.group}/{doc.section} has an empty or invalid id: {doc.id!r}"
        raise DocMergeError(msg)
    segments = tuple(doc.id.split(ID_SEPARATOR))
    if any(not segment for segment in segments):
        msg = f"Doc id {doc.id!r} contains an empty path segment"
        raise DocMergeError(msg)
    return segments


def _sort_key(doc: DocRecord) -> tuple[str, str, str]:
    return (doc.group, doc.section, doc.id)


def merge_docs(docs: cabc.Sequence[DocRecord]) -> list[DocRecord]:
    """Nest each doc under its nearest dotted-prefix ancestor.

    Parameters
    ----------
    docs : Sequence[DocRecord]
        Flat list of top-level records; input order does not matter.

    Returns
    -------
    list[DocRecord]
        Records without an ancestor, sorted by group, section, and id. Every
        input record appears exactly once in the returned forest, either at
        the top level or in exactly one ``children`` list.

    Raises
    ------
    DocMergeError
        If an id is empty or has empty segments. Validation happens before
        any record is mutated, so the input is untouched on failure.
    """
    ordered = sorted(docs, key=_sort_key)
    paths = {id(doc): _id_path(doc) for doc in ordered}

    # the first record in sort order stands for a duplicated id
    by_path: dict[tuple[str, ...], DocRecord] = {}
    for doc in ordered:
        by_path.setdefault(paths[id(doc)], doc)

    parents: dict[int, DocRecord] = {}
    for doc in ordered:
        path = paths[id(doc)]
        for cut in range(len(path) - 1, 0, -1):
            parent = by_path.get(path[:cut])
            if parent is not None:
                parents[id(doc)] = parent
                break

    roots: list[DocRecord] = []
    for doc in ordered:
        parent = parents.get(id(doc))
        if parent is None:
            doc.parent_id = None
            roots.append(doc)
        else:
            doc.parent_id = parent.id
            parent.children.append(doc)
    for doc in ordered:
        doc.children.sort(key=_sort_key)
    return roots


__all__ = [
    "DocMergeError",
    "find_case_collisions",
    "merge_docs",
    "resolve_identifier_collisions",
    "rewrite_identifier",
]
