"""Value types describing doc APIs and how plugins extend the base API."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path
from types import MappingProxyType

_KNOWN_FIELDS = ("identifier", "title", "layout", "ui_resources")
_IDENTITY_FIELDS = ("name", "apiName", "root")


class DocAPILoadError(RuntimeError):
    """Raised when a doc API plugin cannot be loaded or is malformed."""


class MissingBaseDocAPIError(DocAPILoadError):
    """Raised when the mandatory base doc API is not available."""


@dc.dataclass(frozen=True, slots=True)
class UIResources:
    """CSS and script assets a doc API contributes to the UI shell.

    Paths are relative to the plugin directory and keep their declared order.
    """

    css: tuple[str, ...] = ()
    js: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, payload: object) -> UIResources:
        """Build resources from a ``{"css": [...], "js": [...]}`` mapping."""
        if payload is None:
            return cls()
        if not isinstance(payload, cabc.Mapping):
            msg = f"ui_resources must be a mapping, got {type(payload).__name__}."
            raise DocAPILoadError(msg)
        return cls(
            css=_as_paths(payload.get("css"), "css"),
            js=_as_paths(payload.get("js"), "js"),
        )


@dc.dataclass(frozen=True, slots=True)
class DocAPI:
    """A pluggable extraction and presentation strategy.

    Attributes
    ----------
    name : str
        Registry key, assigned by the loader from the plugin directory name.
    identifier : str
        Tag that selects this API inside a comment block (``@doc``).
    title : str
        Label the UI shows for sections using this API.
    layout : Mapping[str, Any]
        Layout hints passed through to the UI (ordering of doc types, etc.).
    ui_resources : UIResources
        Assets concatenated into the shell application.
    extension_data : Mapping[str, Any]
        Any other plugin field, passed through untouched.
    root : Path or None
        Directory the plugin was loaded from; resource paths resolve here.
    """

    name: str
    identifier: str
    title: str = ""
    layout: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    ui_resources: UIResources = dc.field(default_factory=UIResources)
    extension_data: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    root: Path | None = None

    @classmethod
    def from_plugin(
        cls, name: str, payload: cabc.Mapping[str, typ.Any], root: Path | None = None
    ) -> DocAPI:
        """Build a stand-alone API (the base) from a plugin ``DOC_API`` mapping."""
        identifier = payload.get("identifier") or name
        return cls(
            name=name,
            identifier=str(identifier),
            title=str(payload.get("title") or name.title()),
            layout=MappingProxyType(_as_layout(payload.get("layout"))),
            ui_resources=UIResources.from_mapping(payload.get("ui_resources")),
            extension_data=MappingProxyType(_extension_fields(payload)),
            root=root,
        )


def extend_doc_api(
    base: DocAPI,
    name: str,
    overrides: cabc.Mapping[str, typ.Any],
    root: Path | None = None,
) -> DocAPI:
    """Return ``base`` with the fields present in ``overrides`` applied.

    Fields missing from ``overrides`` keep the base value. ``ui_resources``
    buckets and ``extension_data`` keys are overridden individually.
    ``name`` and ``root`` always describe the plugin itself.

    Examples
    --------
    >>> base = DocAPI(name="doc", identifier="doc", title="Docs")
    >>> api = extend_doc_api(base, "custom", {"identifier": "custom"})
    >>> (api.name, api.identifier, api.title)
    ('custom', 'custom', 'Docs')
    """
    changes: dict[str, typ.Any] = {"name": name, "root": root}
    if "identifier" in overrides:
        changes["identifier"] = str(overrides["identifier"])
    if "title" in overrides:
        changes["title"] = str(overrides["title"])
    if "layout" in overrides:
        changes["layout"] = MappingProxyType(_as_layout(overrides["layout"]))
    if "ui_resources" in overrides:
        own = overrides["ui_resources"] or {}
        if not isinstance(own, cabc.Mapping):
            msg = f"ui_resources must be a mapping, got {type(own).__name__}."
            raise DocAPILoadError(msg)
        changes["ui_resources"] = UIResources(
            css=_as_paths(own["css"], "css") if "css" in own else base.ui_resources.css,
            js=_as_paths(own["js"], "js") if "js" in own else base.ui_resources.js,
        )
    extension = _extension_fields(overrides)
    if extension:
        changes["extension_data"] = MappingProxyType(
            {**base.extension_data, **extension}
        )
    return dc.replace(base, **changes)


def _as_paths(value: object, bucket: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, cabc.Iterable):
        msg = f"ui_resources.{bucket} must be a list of paths."
        raise DocAPILoadError(msg)
    return tuple(str(item) for item in value)


def _as_layout(value: object) -> dict[str, typ.Any]:
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = f"layout must be a mapping, got {type(value).__name__}."
        raise DocAPILoadError(msg)
    return dict(value)


def _extension_fields(payload: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    return {
        key: value
        for key, value in payload.items()
        if key not in _KNOWN_FIELDS and key not in _IDENTITY_FIELDS
    }


__all__ = [
    "DocAPI",
    "DocAPILoadError",
    "MissingBaseDocAPIError",
    "UIResources",
    "extend_doc_api",
]
