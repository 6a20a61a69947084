"""Build the JavaScript metadata files the documentation UI loads at startup.

The UI reads four generated scripts from ``documentation/``:

* ``docs-metadata.js`` assigns ``DOC_DATA``, one entry per top-level doc, used
  for search and for locating partials.
* ``groups-metadata.js`` assigns ``GROUP_DATA``, the configured groups and
  sections with the doc API each section ended up using.
* ``layout-metadata.js`` assigns ``LAYOUT_DATA``, the identifier, title and
  layout of every doc API.
* ``docular-configuration.js`` sets the base URL, the optional analytics
  tracker and the discussion settings.

Payloads are JSON with one object per line, so the files stay diff-friendly
and always parse back as JSON.

Example
-------
>>> format_assignment("DOC_DATA", [{"id": "a"}, {"id": "b"}])
'DOC_DATA=[\\n{"id": "a"},\\n{"id": "b"}\\n];'
"""

from __future__ import annotations

import collections.abc as cabc
import json
import typing as typ

if typ.TYPE_CHECKING:
    from docular.config import DocularConfig, GroupConfig
    from docular.doc_api import DocAPI
    from docular.extraction import DocRecord

GA_SCRIPT_URL = "('https:' == document.location.protocol ? 'https://ssl' : 'http://www') + '.google-analytics.com/ga.js'"


def _dumps(value: object) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=False)


def format_assignment(name: str, payload: object) -> str:
    """Return ``NAME=<json>;`` with list items or mapping entries one per line."""
    match payload:
        case list() | tuple():
            if not payload:
                return f"{name}=[];"
            body = ",\n".join(_dumps(item) for item in payload)
            return f"{name}=[\n{body}\n];"
        case cabc.Mapping():
            if not payload:
                return f"{name}={{}};"
            body = ",\n".join(
                f"{_dumps(str(key))}: {_dumps(value)}" for key, value in payload.items()
            )
            return f"{name}={{\n{body}\n}};"
        case _:
            return f"{name}={_dumps(payload)};"


def doc_metadata(doc: DocRecord) -> dict[str, typ.Any]:
    """Return the search/navigation entry for one top-level doc."""
    keywords = sorted(
        {
            word.lower()
            for record in doc.walk()
            for word in (record.id, record.name, *record.tags.get("keywords", []))
            if word
        }
    )
    return {
        "group": doc.group,
        "section": doc.section,
        "id": doc.id,
        "name": doc.name,
        "shortName": doc.name,
        "type": doc.doc_type,
        "docApi": doc.api_name,
        "shortDescription": doc.short_description,
        "keywords": " ".join(keywords),
        "children": [child.id for child in doc.children],
        "partialUrl": f"documentation/partials/{doc.group}/{doc.section}/{doc.id}.html",
    }


def docs_metadata(docs: cabc.Iterable[DocRecord]) -> list[dict[str, typ.Any]]:
    """Return metadata entries for ``docs`` in their given order."""
    return [doc_metadata(doc) for doc in docs]


def groups_metadata(groups: cabc.Iterable[GroupConfig]) -> list[dict[str, typ.Any]]:
    """Return the group/section tree as the UI expects it."""
    return [
        {
            "groupId": group.group_id,
            "groupTitle": group.title,
            "visible": group.visible,
            "showSource": group.show_source,
            "sections": [
                {
                    "id": section.id,
                    "title": section.title,
                    "doc_api": section.doc_api,
                    "showSource": group.section_show_source(section),
                }
                for section in group.sections
            ],
        }
        for group in groups
    ]


def layout_metadata(doc_apis: cabc.Mapping[str, DocAPI]) -> dict[str, dict[str, typ.Any]]:
    """Return ``identifier``/``title``/``layout`` for every doc API."""
    return {
        name: {
            "identifier": api.identifier,
            "title": api.title,
            "layout": dict(api.layout),
        }
        for name, api in doc_apis.items()
    }


def configuration_script(config: DocularConfig) -> str:
    """Return the body of ``docular-configuration.js``.

    The script sets ``baseURL`` and injects a ``<base>`` tag when a base URL
    is configured, adds the asynchronous Google Analytics tracker when both
    ``account`` and ``domainName`` are set, and always defines
    ``window.discussionConfigs``.
    """
    parts: list[str] = []
    if config.base_url:
        base_url = _dumps(config.base_url)
        parts.append(f"baseURL = {base_url}; addTag('base', {{href: {base_url}}});")

    analytics = config.analytics
    if analytics.enabled:
        parts.append(
            "var _gaq = _gaq || []; "
            f"_gaq.push(['_setAccount', {_dumps(analytics.account)}]); "
            f"_gaq.push(['_setDomainName', {_dumps(analytics.domain_name)}]); "
            "(function() { "
            "var ga = document.createElement('script'); "
            "ga.type = 'text/javascript'; ga.async = true; "
            f"ga.src = {GA_SCRIPT_URL}; "
            "var s = document.getElementsByTagName('script')[0]; "
            "s.parentNode.insertBefore(ga, s); "
            "})();"
        )

    discussions = config.discussions
    discussion_config = {
        "active": discussions.active,
        "shortName": discussions.short_name or False,
        "url": discussions.url or False,
        "dev": discussions.dev,
    }
    parts.append(f"window.discussionConfigs = {_dumps(discussion_config)};")
    return " ".join(parts) + "\n"


__all__ = [
    "configuration_script",
    "doc_metadata",
    "docs_metadata",
    "format_assignment",
    "groups_metadata",
    "layout_metadata",
]
