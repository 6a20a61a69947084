"""Base doc API: generic ``@doc`` blocks for any JavaScript code."""

DOC_API = {
    "identifier": "doc",
    "title": "Docular",
    "layout": {
        "doc_types": ["overview", "object", "function", "property", "event"],
        "sidebar": {"group_by": "type"},
    },
    "ui_resources": {
        "css": ["resources/doc_api.css"],
        "js": ["resources/doc_api.js"],
    },
}
