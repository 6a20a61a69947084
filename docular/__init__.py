"""Generate a static, single-page documentation webapp from annotated sources.

docular extracts documentation comments from JavaScript sources and standalone
``.doc`` files, renders one HTML partial per top-level doc, and writes the
metadata scripts and bundled UI resources the documentation shell loads.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``generate``: Run the generation pipeline for a loaded configuration.

Examples
--------
>>> from docular import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .pipeline import generate

__all__ = ["app", "generate", "main"]
