"""Shared fixtures for the docular test suite.

The fixtures build throwaway doc API plugin directories, doc records, and a
loguru sink so tests can assert on logged messages without touching stderr.
"""

from __future__ import annotations

import collections.abc as cabc
import textwrap
import typing as typ
from pathlib import Path

import pytest
from loguru import logger

from docular.doc_api import DocAPI
from docular.extraction import DocRecord

PluginFactory = cabc.Callable[..., Path]
DocFactory = cabc.Callable[..., DocRecord]


def _stub_renderer(record: DocRecord) -> str:
    children = "".join(_stub_renderer(child) for child in record.children)
    return f'<section id="{record.id}">{record.name}{children}</section>\n'


@pytest.fixture
def make_plugin(tmp_path: Path) -> PluginFactory:
    """Return a factory writing ``docular-doc-api-<name>`` plugin folders.

    The factory accepts the plugin ``name``, the ``DOC_API`` body as Python
    source, optional ``resources`` (relative path to file content), and the
    parent ``root`` directory (``tmp_path / "plugins"`` by default).
    """

    def _make(
        name: str,
        doc_api: str | None = None,
        *,
        resources: cabc.Mapping[str, str] | None = None,
        root: Path | None = None,
        module_source: str | None = None,
    ) -> Path:
        parent = root or tmp_path / "plugins"
        plugin = parent / f"docular-doc-api-{name}"
        plugin.mkdir(parents=True, exist_ok=True)
        source = module_source
        if source is None:
            body = doc_api if doc_api is not None else f'{{"identifier": "{name}"}}'
            source = f"DOC_API = {textwrap.dedent(body).strip()}\n"
        (plugin / "api.py").write_text(source, encoding="utf-8")
        for relative, content in (resources or {}).items():
            target = plugin / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return parent

    return _make


@pytest.fixture
def base_api() -> DocAPI:
    """Return a minimal base doc API."""
    return DocAPI(name="doc", identifier="doc", title="Docular")


@pytest.fixture
def make_doc(base_api: DocAPI) -> DocFactory:
    """Return a factory for doc records with a deterministic stub renderer."""

    def _make(
        doc_id: str,
        *,
        group: str = "api",
        section: str = "core",
        doc_type: str = "function",
        description: str = "",
        doc_api: DocAPI | None = None,
        **extra: typ.Any,
    ) -> DocRecord:
        return DocRecord(
            id=doc_id,
            name=doc_id.rsplit(".", 1)[-1],
            doc_type=doc_type,
            group=group,
            section=section,
            doc_api=doc_api or base_api,
            description=description,
            renderer=_stub_renderer,
            **extra,
        )

    return _make


@pytest.fixture
def log_messages() -> cabc.Iterator[list[str]]:
    """Capture loguru messages emitted during the test, formatted as ``LEVEL|message``."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.rstrip("\n")),
        level="DEBUG",
        format="{level}|{message}",
    )
    yield messages
    logger.remove(handler_id)
