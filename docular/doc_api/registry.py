"""Discover doc API plugins and merge them over the base API.

A plugin is a directory named ``docular-doc-api-<name>`` that contains an
``api.py`` module exposing a ``DOC_API`` mapping. The plugin named ``doc`` is
the base: every other plugin starts from a copy of it and overrides only the
fields it declares (see :func:`docular.doc_api.models.extend_doc_api`).

Examples
--------
>>> import asyncio
>>> from docular._constants import BUNDLED_DOC_APIS_DIR
>>> from docular.doc_api import load_doc_apis
>>> apis = asyncio.run(load_doc_apis([BUNDLED_DOC_APIS_DIR]))  # doctest: +SKIP
>>> sorted(apis)  # doctest: +SKIP
['angular', 'doc']
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import importlib.util
import re
import typing as typ
from pathlib import Path

from loguru import logger

from docular import writer
from docular._constants import (
    BASE_DOC_API,
    DOC_API_ATTRIBUTE,
    DOC_API_MODULE,
    DOC_API_PREFIX,
)

from .models import DocAPI, DocAPILoadError, MissingBaseDocAPIError, extend_doc_api

PLUGIN_DIR_PATTERN = re.compile(rf"^{re.escape(DOC_API_PREFIX)}([^/\\]+)$", re.IGNORECASE)


class RawDocAPI(typ.NamedTuple):
    """An unmerged plugin definition and the directory it came from."""

    name: str
    payload: cabc.Mapping[str, typ.Any]
    root: Path


async def load_doc_apis(search_paths: cabc.Sequence[Path]) -> dict[str, DocAPI]:
    """Load every doc API plugin found in ``search_paths``.

    Parameters
    ----------
    search_paths : Sequence[Path]
        Directories scanned for ``docular-doc-api-*`` plugin folders. A
        plugin found in a later directory replaces one of the same name found
        earlier. Missing directories are logged and skipped.

    Returns
    -------
    dict[str, DocAPI]
        Mapping of API name to merged API; ``"doc"`` is always present.

    Raises
    ------
    MissingBaseDocAPIError
        If no usable ``doc`` plugin was found.
    """
    raw: dict[str, RawDocAPI] = {}
    for search_path in search_paths:
        for plugin in await _load_directory(search_path):
            raw[plugin.name] = plugin

    base_raw = raw.pop(BASE_DOC_API, None)
    if base_raw is None:
        msg = f"Error loading default doc api '{BASE_DOC_API}'."
        raise MissingBaseDocAPIError(msg)

    try:
        base = DocAPI.from_plugin(BASE_DOC_API, base_raw.payload, root=base_raw.root)
    except DocAPILoadError as exc:
        msg = f"Error loading default doc api '{BASE_DOC_API}': {exc}"
        raise MissingBaseDocAPIError(msg) from exc
    doc_apis = {BASE_DOC_API: base}
    for name, plugin in raw.items():
        try:
            doc_apis[name] = extend_doc_api(base, name, plugin.payload, root=plugin.root)
        except DocAPILoadError as exc:
            logger.error(f"Failed to load document api '{name}': {exc}")
    logger.info(f"Loaded doc apis: {', '.join(sorted(doc_apis))}")
    return doc_apis


def plugin_name(directory: Path) -> str | None:
    """Return the API name encoded in a plugin directory name, if any."""
    match = PLUGIN_DIR_PATTERN.match(directory.name)
    if match is None:
        return None
    return match.group(1)


async def _load_directory(search_path: Path) -> list[RawDocAPI]:
    """Load all plugins of one directory concurrently, skipping failures."""
    try:
        entries = await writer.list_dir(search_path)
    except OSError as exc:
        logger.error(f"Unable to list doc api directory {search_path}: {exc}")
        return []

    candidates = [
        (name, entry)
        for entry in entries
        if (name := plugin_name(entry)) is not None and entry.is_dir()
    ]
    results = await asyncio.gather(
        *(asyncio.to_thread(_import_plugin, name, entry) for name, entry in candidates),
        return_exceptions=True,
    )

    loaded: list[RawDocAPI] = []
    for (name, entry), result in zip(candidates, results, strict=True):
        if isinstance(result, BaseException):
            logger.error(f"Failed to load document api '{name}' from {entry}: {result}")
            continue
        loaded.append(RawDocAPI(name=name, payload=result, root=entry))
    return loaded


def _import_plugin(name: str, directory: Path) -> cabc.Mapping[str, typ.Any]:
    """Import ``api.py`` from ``directory`` and return its ``DOC_API`` mapping."""
    module_path = directory / DOC_API_MODULE
    if not module_path.is_file():
        msg = f"missing {DOC_API_MODULE}"
        raise DocAPILoadError(msg)
    module_name = f"docular_doc_api_{re.sub(r'[^0-9a-zA-Z_]', '_', name)}"
    spec = importlib.util.spec_from_file_location(module_name, module_path)
    if spec is None or spec.loader is None:
        msg = f"cannot import {module_path}"
        raise DocAPILoadError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    payload = getattr(module, DOC_API_ATTRIBUTE, None)
    if not isinstance(payload, cabc.Mapping):
        msg = f"{module_path} does not define a {DOC_API_ATTRIBUTE} mapping"
        raise DocAPILoadError(msg)
    return payload


__all__ = ["PLUGIN_DIR_PATTERN", "RawDocAPI", "load_doc_apis", "plugin_name"]
