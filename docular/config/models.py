"""Typed dataclasses describing docular site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docular._constants import DEFAULT_DOC_API_ORDER, DEFAULT_ID_REWRITES


class DocularConfigError(ValueError):
    """Raised when the docular configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SectionConfig:
    """A named subset of a group's scripts and docs sharing one doc API.

    Attributes
    ----------
    id : str
        Section identifier, used as a directory name under the group.
    title : str
        Human-friendly label shown by the UI.
    scripts : list[Path]
        Source files scanned for ``/** ... */`` documentation blocks.
    docs : list[Path]
        Stand-alone documentation files, one block per file.
    show_source : bool or None
        Section override for source display; ``None`` defers to the group.
    doc_api : str or None
        Name of the doc API used by the section's records, recorded after
        extraction.
    """

    id: str
    title: str
    scripts: list[Path] = dc.field(default_factory=list)
    docs: list[Path] = dc.field(default_factory=list)
    show_source: bool | None = None
    doc_api: str | None = None


@dc.dataclass(slots=True)
class GroupConfig:
    """Top-level documentation collection containing sections."""

    group_id: str
    title: str
    sections: list[SectionConfig] = dc.field(default_factory=list)
    visible: bool = True
    show_source: bool = False

    def section_show_source(self, section: SectionConfig) -> bool:
        """Return the effective show-source flag for ``section``."""
        if section.show_source is not None:
            return section.show_source
        return self.show_source


@dc.dataclass(slots=True)
class AnalyticsConfig:
    """Google Analytics account settings injected into the UI."""

    account: str | None = None
    domain_name: str | None = None

    @property
    def enabled(self) -> bool:
        """Return ``True`` when both the account and domain are configured."""
        return bool(self.account and self.domain_name)


@dc.dataclass(slots=True)
class DiscussionsConfig:
    """Disqus discussion settings injected into the UI."""

    short_name: str | None = None
    url: str | None = None
    dev: bool = False

    @property
    def active(self) -> bool:
        """Return ``True`` when a short name or URL is configured."""
        return bool(self.short_name or self.url)


@dc.dataclass(slots=True)
class DocularConfig:
    """A fully resolved generation run configuration."""

    groups: list[GroupConfig] = dc.field(default_factory=list)
    output_dir: Path = Path("webapp")
    base_url: str | None = "/"
    doc_api_order: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_DOC_API_ORDER)
    )
    doc_api_paths: list[Path] = dc.field(default_factory=list)
    show_angular_docs: bool = False
    show_docular_docs: bool = False
    analytics: AnalyticsConfig = dc.field(default_factory=AnalyticsConfig)
    discussions: DiscussionsConfig = dc.field(default_factory=DiscussionsConfig)
    docular_partial_home: Path | None = None
    docular_partial_group_index: Path | None = None
    id_rewrites: dict[str, str] = dc.field(
        default_factory=lambda: dict(DEFAULT_ID_REWRITES)
    )

    def iter_sections(self) -> list[tuple[GroupConfig, SectionConfig]]:
        """Return every ``(group, section)`` pair in configuration order."""
        return [(group, section) for group in self.groups for section in group.sections]


__all__ = [
    "AnalyticsConfig",
    "DiscussionsConfig",
    "DocularConfig",
    "DocularConfigError",
    "GroupConfig",
    "SectionConfig",
]
