"""Common literal values used across docular.

These constants keep plugin prefixes, output locations, and metadata variable
names centralized so the pipeline, the UI shell, and tests can import the same
values without drifting. Intended for internal use within the docular package.

Examples
--------
>>> from docular import _constants
>>> _constants.DOC_API_PREFIX + _constants.BASE_DOC_API
'docular-doc-api-doc'
>>> _constants.PARTIALS_DIR.as_posix()
'documentation/partials'
"""

from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_ROOT / "templates"
BUNDLED_DOC_APIS_DIR = PACKAGE_ROOT / "doc_apis"
DEFAULT_GROUPS_DIR = PACKAGE_ROOT / "default_groups"

DOC_API_PREFIX = "docular-doc-api-"
DOC_API_MODULE = "api.py"
DOC_API_ATTRIBUTE = "DOC_API"
BASE_DOC_API = "doc"

DEFAULT_DOC_API_ORDER = ("doc", "angular")
DEFAULT_ID_REWRITES = {"angular.Module": "angular.IModule"}
UNLISTED_RESOURCE_ORDER = 99

DOCUMENTATION_DIR = Path("documentation")
PARTIALS_DIR = DOCUMENTATION_DIR / "partials"
SOURCE_DIR = DOCUMENTATION_DIR / "docular-source"
WEBAPP_PARTIALS_DIR = Path("resources") / "docular-partials"
DOC_API_RESOURCES_DIR = Path("resources") / "doc_api_resources"

DOCS_METADATA_FILE = DOCUMENTATION_DIR / "docs-metadata.js"
GROUPS_METADATA_FILE = DOCUMENTATION_DIR / "groups-metadata.js"
LAYOUT_METADATA_FILE = DOCUMENTATION_DIR / "layout-metadata.js"
CONFIGURATION_SCRIPT_FILE = DOCUMENTATION_DIR / "docular-configuration.js"

DOCS_METADATA_VAR = "DOC_DATA"
GROUPS_METADATA_VAR = "GROUP_DATA"
LAYOUT_METADATA_VAR = "LAYOUT_DATA"

WEBAPP_PARTIAL_NAMES = ("docular_partial_home", "docular_partial_group_index")
INDEX_TEMPLATE = "index.html"
