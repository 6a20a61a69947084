"""Order and concatenate the UI resources contributed by doc APIs.

Each doc API lists CSS and script files relative to its plugin directory.
:func:`order_ui_resources` ranks them by the caller's API priority list, and
:func:`concatenate_ui_resources` reads them and joins each type into a single
bundle, so the shell page loads one ``doc_api.css`` and one ``doc_api.js``.

Example
-------
>>> from docular.doc_api import DocAPI, UIResources
>>> from pathlib import Path
>>> apis = {
...     "custom": DocAPI("custom", "custom", ui_resources=UIResources(js=("c.js",)), root=Path("/c")),
...     "doc": DocAPI("doc", "doc", ui_resources=UIResources(js=("d.js",)), root=Path("/d")),
... }
>>> [entry.source_path.as_posix() for entry in order_ui_resources(apis, ["doc"])]
['/d/d.js', '/c/c.js']
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path

from loguru import logger

from docular import writer
from docular._constants import UNLISTED_RESOURCE_ORDER

if typ.TYPE_CHECKING:
    from docular.doc_api import DocAPI

ResourceType = typ.Literal["css", "js"]
RESOURCE_SEPARATOR = " "


@dc.dataclass(frozen=True, slots=True)
class UIResourceEntry:
    """A single CSS or script file scheduled for concatenation."""

    type: ResourceType
    source_path: Path
    order: int
    api_name: str
    discovery_index: int


@dc.dataclass(frozen=True, slots=True)
class ConcatenatedResources:
    """Bundled UI resources, one string per resource type."""

    css: str
    js: str


def build_resource_order(priority: cabc.Sequence[str]) -> dict[str, int]:
    """Return an ``api name -> rank`` table; earlier names rank first."""
    ranks: dict[str, int] = {}
    for rank, name in enumerate(priority):
        ranks.setdefault(name, rank)
    return ranks


def order_ui_resources(
    doc_apis: cabc.Mapping[str, DocAPI], priority: cabc.Sequence[str]
) -> list[UIResourceEntry]:
    """Return every UI resource of ``doc_apis`` in emission order.

    Parameters
    ----------
    doc_apis : Mapping[str, DocAPI]
        Loaded APIs, in discovery order.
    priority : Sequence[str]
        API names in the order their resources should be emitted. APIs not
        listed follow all listed ones, in discovery order.

    Returns
    -------
    list[UIResourceEntry]
        Entries sorted by rank. Within one rank, discovery order is kept
        (each API's CSS first, then its scripts, as declared). A file
        reached twice is emitted once, at its first position.
    """
    ranks = build_resource_order(priority)
    entries: list[UIResourceEntry] = []
    for name, api in doc_apis.items():
        root = api.root or Path()
        order = ranks.get(name, UNLISTED_RESOURCE_ORDER)
        for resource_type in ("css", "js"):
            for relative in getattr(api.ui_resources, resource_type):
                entries.append(
                    UIResourceEntry(
                        type=resource_type,
                        source_path=root / relative,
                        order=order,
                        api_name=name,
                        discovery_index=len(entries),
                    )
                )
    entries.sort(key=lambda entry: (entry.order, entry.discovery_index))

    seen: set[tuple[str, Path]] = set()
    unique: list[UIResourceEntry] = []
    for entry in entries:
        key = (entry.type, entry.source_path)
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


async def _read_resource(entry: UIResourceEntry) -> str | None:
    try:
        return await writer.read_text(entry.source_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error(
            f"Copying ui resource {entry.source_path} for doc api "
            f"'{entry.api_name}' failed: {exc}"
        )
        return None


async def concatenate_ui_resources(
    entries: cabc.Sequence[UIResourceEntry],
) -> ConcatenatedResources:
    """Read ``entries`` concurrently and join them per type in the given order.

    Missing or unreadable files are logged and left out; the remaining
    entries are still concatenated.
    """
    contents = await asyncio.gather(*(_read_resource(entry) for entry in entries))
    buckets: dict[str, list[str]] = {"css": [], "js": []}
    for entry, content in zip(entries, contents, strict=True):
        if content is not None:
            buckets[entry.type].append(content)
    return ConcatenatedResources(
        css=RESOURCE_SEPARATOR.join(buckets["css"]),
        js=RESOURCE_SEPARATOR.join(buckets["js"]),
    )


__all__ = [
    "ConcatenatedResources",
    "UIResourceEntry",
    "build_resource_order",
    "concatenate_ui_resources",
    "order_ui_resources",
]
