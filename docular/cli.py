"""Cyclopts CLI entrypoint for generating a docular documentation webapp.

The ``docular`` console script reads a ``docular.yaml`` configuration, runs
the generation pipeline, and writes the static webapp (partials, metadata
scripts, UI resource bundles, and the shell page) into the output directory.
Every parameter can also be supplied through an ``INPUT_``-prefixed
environment variable, which keeps the command usable from CI actions.

Examples
--------
Generate the site described by ``docular.yaml`` in the current directory:

>>> from docular.cli import main
>>> main()  # doctest: +SKIP

Write to a different directory with debug logging:

>>> from docular.cli import app
>>> app(["generate", "--output-dir", "dist", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from loguru import logger

from .config import DocularConfigError, load_docular_config
from .pipeline import PipelineState, generate as run_generation

DEFAULT_CONFIG = Path("docular.yaml")
LOG_FORMAT = "<level>{level: <8}</level> | {message}"

app = App(name="docular", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG when ``verbose`` is set."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=LOG_FORMAT)


@app.command(help="Generate the documentation webapp from a docular config.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to docular config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug output", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate the documentation webapp for the requested configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docular.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Directory to write the webapp into; replaces ``outputDir`` from the
        configuration file.
    verbose : bool, optional
        Emit debug logging, including pipeline state transitions.

    Raises
    ------
    SystemExit
        With status 1 when the configuration cannot be loaded or the base
        doc API is missing.
    """
    configure_logging(verbose=verbose)
    try:
        site_config = load_docular_config(config)
    except (FileNotFoundError, DocularConfigError) as exc:
        logger.critical(f"Cannot load configuration {config}: {exc}")
        raise SystemExit(1) from exc

    if output_dir is not None:
        site_config = dc.replace(site_config, output_dir=output_dir)

    report = run_generation(site_config)
    if report.state is PipelineState.FATAL_API_LOAD_FAILURE:
        raise SystemExit(1)
    if report.failures:
        logger.warning(f"{len(report.failures)} task(s) failed; see errors above")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docular`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
