"""Doc API plugin model and loader."""

from .models import (
    DocAPI,
    DocAPILoadError,
    MissingBaseDocAPIError,
    UIResources,
    extend_doc_api,
)
from .registry import load_doc_apis, plugin_name

__all__ = [
    "DocAPI",
    "DocAPILoadError",
    "MissingBaseDocAPIError",
    "UIResources",
    "extend_doc_api",
    "load_doc_apis",
    "plugin_name",
]
