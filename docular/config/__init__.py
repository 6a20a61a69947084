"""Load and validate docular configuration YAML.

This subpackage parses a ``docular.yaml`` file, fills the documented default
for every optional field, resolves script/doc/partial paths relative to the
config file, appends the bundled default groups when requested, and produces
strongly typed dataclasses (:class:`DocularConfig`, :class:`GroupConfig`,
:class:`SectionConfig`) that the generation pipeline consumes.

Examples
--------
>>> from pathlib import Path
>>> from docular.config import load_docular_config
>>> config = load_docular_config(Path("docular.yaml"))  # doctest: +SKIP
>>> [group.group_id for group in config.groups]  # doctest: +SKIP
['api']
"""

from .loader import build_docular_config, load_default_groups, load_docular_config
from .models import (
    AnalyticsConfig,
    DiscussionsConfig,
    DocularConfig,
    DocularConfigError,
    GroupConfig,
    SectionConfig,
)

__all__ = [
    "AnalyticsConfig",
    "DiscussionsConfig",
    "DocularConfig",
    "DocularConfigError",
    "GroupConfig",
    "SectionConfig",
    "build_docular_config",
    "load_default_groups",
    "load_docular_config",
]
