"""Angular doc API: ``@ngdoc`` blocks for modules, directives and services."""

DOC_API = {
    "identifier": "ngdoc",
    "title": "Angular",
    "layout": {
        "doc_types": [
            "overview",
            "module",
            "directive",
            "service",
            "provider",
            "filter",
            "function",
            "object",
            "type",
        ],
        "sidebar": {"group_by": "module"},
    },
    "ui_resources": {
        "css": ["resources/ngdoc.css"],
        "js": ["resources/ngdoc.js"],
    },
    "module_separator": ":",
}
