"""Load docular configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docular._constants import DEFAULT_GROUPS_DIR

from .helpers import (
    _as_bool,
    _as_list,
    _as_mapping,
    _optional_path,
    _optional_str,
    _resolve_path,
    _resolve_paths,
)
from .models import (
    AnalyticsConfig,
    DiscussionsConfig,
    DocularConfig,
    DocularConfigError,
    GroupConfig,
    SectionConfig,
)

DEFAULT_GROUP_FILES = {
    "docular": ("docular.yaml", "docular_examples.yaml"),
    "angular": ("angular.yaml",),
}


def load_docular_config(path: Path) -> DocularConfig:
    """Load the YAML configuration describing a documentation build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docular.yaml``). Relative paths inside the file are resolved
        against its parent directory.

    Returns
    -------
    DocularConfig
        Parsed configuration with every optional field defaulted and the
        bundled default groups appended when requested.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    DocularConfigError
        If a field has the wrong shape (for example, a group without
        ``groupId`` or a non-boolean ``showSource``).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docular.config import load_docular_config
    >>> config = load_docular_config(Path("docular.yaml"))  # doctest: +SKIP
    >>> config.base_url  # doctest: +SKIP
    '/'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)
    raw = _read_yaml(path)
    return build_docular_config(raw, base_dir=path.resolve().parent)


def build_docular_config(
    raw: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> DocularConfig:
    """Validate a raw configuration mapping and fill documented defaults."""
    defaults = DocularConfig()
    groups = [
        _build_group(payload, base_dir=base_dir, index=index)
        for index, payload in enumerate(_as_list(raw.get("groups"), field="groups"))
    ]

    show_angular = _as_bool(
        raw.get("showAngularDocs"), field="showAngularDocs", default=False
    )
    show_docular = _as_bool(
        raw.get("showDocularDocs"), field="showDocularDocs", default=False
    )
    if show_docular:
        groups.extend(load_default_groups("docular"))
    if show_angular:
        groups.extend(load_default_groups("angular"))

    doc_api_order = [
        str(name) for name in _as_list(raw.get("docAPIOrder"), field="docAPIOrder")
    ] or list(defaults.doc_api_order)

    id_rewrites = defaults.id_rewrites
    if "idRewrites" in raw:
        id_rewrites = {
            str(key): str(value)
            for key, value in _as_mapping(raw["idRewrites"], field="idRewrites").items()
        }

    return DocularConfig(
        groups=groups,
        output_dir=_resolve_path(raw.get("outputDir") or defaults.output_dir, base_dir),
        base_url=_optional_str(raw.get("baseUrl", defaults.base_url)),
        doc_api_order=doc_api_order,
        doc_api_paths=_resolve_paths(
            raw.get("docApiPaths"), field="docApiPaths", base_dir=base_dir
        ),
        show_angular_docs=show_angular,
        show_docular_docs=show_docular,
        analytics=_build_analytics(raw.get("analytics")),
        discussions=_build_discussions(raw.get("discussions")),
        docular_partial_home=_optional_path(raw.get("docular_partial_home"), base_dir),
        docular_partial_group_index=_optional_path(
            raw.get("docular_partial_group_index"), base_dir
        ),
        id_rewrites=id_rewrites,
    )


def load_default_groups(name: str) -> list[GroupConfig]:
    """Return the bundled default groups registered under ``name``.

    Paths inside the bundled group files are relative to the
    ``default_groups`` directory shipped with the package.
    """
    try:
        filenames = DEFAULT_GROUP_FILES[name]
    except KeyError as exc:
        available = ", ".join(sorted(DEFAULT_GROUP_FILES))
        msg = f"Unknown default group '{name}'. Known groups: {available}"
        raise DocularConfigError(msg) from exc
    groups: list[GroupConfig] = []
    for filename in filenames:
        raw = _read_yaml(DEFAULT_GROUPS_DIR / filename)
        groups.append(_build_group(raw, base_dir=DEFAULT_GROUPS_DIR, index=0))
    return groups


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise DocularConfigError(msg)
    return dict(loaded)


def _build_group(payload: object, *, base_dir: Path, index: int) -> GroupConfig:
    """Build a GroupConfig for a single ``groups`` entry."""
    data = _as_mapping(payload, field=f"groups[{index}]")
    group_id = _optional_str(data.get("groupId"))
    if not group_id:
        msg = f"Group #{index + 1} is missing 'groupId'."
        raise DocularConfigError(msg)
    sections_raw = _as_list(data.get("sections"), field=f"{group_id}.sections")
    sections = [
        _build_section(item, group_id=group_id, base_dir=base_dir)
        for item in sections_raw
    ]
    return GroupConfig(
        group_id=group_id,
        title=_optional_str(data.get("groupTitle")) or group_id.replace("-", " ").title(),
        sections=sections,
        visible=_as_bool(data.get("visible"), field=f"{group_id}.visible", default=True),
        show_source=_as_bool(
            data.get("showSource"), field=f"{group_id}.showSource", default=False
        ),
    )


def _build_section(payload: object, *, group_id: str, base_dir: Path) -> SectionConfig:
    """Build a SectionConfig, resolving script and doc paths."""
    data = _as_mapping(payload, field=f"{group_id}.sections")
    section_id = _optional_str(data.get("id"))
    if not section_id:
        msg = f"A section of group '{group_id}' is missing 'id'."
        raise DocularConfigError(msg)
    field = f"{group_id}.{section_id}"
    show_source = data.get("showSource")
    if show_source is not None:
        show_source = _as_bool(show_source, field=f"{field}.showSource", default=False)
    return SectionConfig(
        id=section_id,
        title=_optional_str(data.get("title")) or section_id,
        scripts=_resolve_paths(
            data.get("scripts"), field=f"{field}.scripts", base_dir=base_dir
        ),
        docs=_resolve_paths(data.get("docs"), field=f"{field}.docs", base_dir=base_dir),
        show_source=show_source,
    )


def _build_analytics(payload: object) -> AnalyticsConfig:
    data = _as_mapping(payload, field="analytics")
    return AnalyticsConfig(
        account=_optional_str(data.get("account")),
        domain_name=_optional_str(data.get("domainName")),
    )


def _build_discussions(payload: object) -> DiscussionsConfig:
    data = _as_mapping(payload, field="discussions")
    return DiscussionsConfig(
        short_name=_optional_str(data.get("shortName")),
        url=_optional_str(data.get("url")),
        dev=_as_bool(data.get("dev"), field="discussions.dev", default=False),
    )


__all__ = ["build_docular_config", "load_default_groups", "load_docular_config"]
