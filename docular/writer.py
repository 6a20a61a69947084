"""Asynchronous file-system helpers used by the generation pipeline.

Every helper performs its blocking work through :func:`asyncio.to_thread` so
the event loop stays free to interleave the other pending tasks of a stage.
Writes overwrite unconditionally; no cleanup is attempted after a failed or
partial write.

Examples
--------
>>> import asyncio
>>> from pathlib import Path
>>> from docular import writer
>>> asyncio.run(writer.make_dir(Path("webapp/documentation")))  # doctest: +SKIP
>>> asyncio.run(writer.output(Path("webapp/a.js"), ["A=", "1", ";"]))  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

Content = str | bytes | cabc.Iterable[str]


async def make_dir(path: Path, recursive: bool = True) -> None:
    """Create ``path``; parents are created too when ``recursive`` is set."""
    await asyncio.to_thread(path.mkdir, parents=recursive, exist_ok=True)


async def output(path: Path, content: Content) -> None:
    """Write ``content`` to ``path``, joining string pieces in order."""
    match content:
        case bytes():
            await asyncio.to_thread(path.write_bytes, content)
        case str():
            await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        case _:
            text = "".join(content)
            await asyncio.to_thread(path.write_text, text, encoding="utf-8")


async def read_bytes(path: Path) -> bytes:
    """Return the raw bytes stored at ``path``."""
    return await asyncio.to_thread(path.read_bytes)


async def read_text(path: Path) -> str:
    """Return the UTF-8 text stored at ``path``."""
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


async def list_dir(path: Path) -> list[Path]:
    """Return the entries of ``path`` sorted by name."""

    def _list() -> list[Path]:
        return sorted(path.iterdir(), key=lambda entry: entry.name)

    return await asyncio.to_thread(_list)


__all__ = ["Content", "list_dir", "make_dir", "output", "read_bytes", "read_text"]
