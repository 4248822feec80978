from __future__ import annotations

"""
Typer CLI entry point for generating the SBOM dashboard.

Runs once per CI job:
- Expands the SBOM glob patterns (comma-separated) relative to --root
- Parses every CycloneDX JSON/YAML file (SPDX XML is accepted but yields nothing)
- Writes parse-sboms.json and index.html into --output-dir
- Prints a Rich summary of datasets, top CVEs and failed files

Every option can also come from the matching GitHub Action input variable
(INPUT_SBOM_FILES, INPUT_OUTPUT_DIR, INPUT_TITLE, INPUT_THEME); when GITHUB_OUTPUT is
set, the output-path and preview-url Action outputs are written there.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from sbomdash.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SBOM_FILES,
    DEFAULT_THEME,
    DEFAULT_TITLE,
    OUTPUT_HTML_NAME,
    THEMES,
    Config,
)
from sbomdash.errors import OutputDirectoryError
from sbomdash.pipeline import run_pipeline
from sbomdash.reporting.console import print_report

logger = logging.getLogger(__name__)

app = typer.Typer(help="SBOM Dashboard - turn SBOM vulnerability data into a static dashboard.")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records through Rich; --verbose shows DEBUG, --quiet only warnings."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _config_from_options(
    sbom_files: str,
    output_dir: str,
    title: str,
    theme: str,
    root: Path,
) -> Config:
    if theme not in THEMES:
        raise typer.BadParameter(f"Theme must be one of {', '.join(THEMES)}, got: {theme}")
    return Config(
        sbom_files=sbom_files or DEFAULT_SBOM_FILES,
        output_dir=Path(output_dir) if output_dir.strip() else None,
        title=title or DEFAULT_TITLE,
        theme=theme,
        root=root,
    )


def write_action_outputs(config: Config) -> None:
    """Append output-path and preview-url to $GITHUB_OUTPUT when running as a GitHub Action."""
    github_output = os.environ.get("GITHUB_OUTPUT")
    if not github_output:
        return
    preview_url = (config.output_path / OUTPUT_HTML_NAME).resolve().as_uri()
    try:
        with open(github_output, "a", encoding="utf-8") as out:
            out.write(f"output-path={config.output_dir}\n")
            out.write(f"preview-url={preview_url}\n")
    except OSError as e:
        logger.warning("Could not write GitHub outputs to %s: %s", github_output, e)


@app.command()
def generate(
    sbom_files: str = typer.Option(
        DEFAULT_SBOM_FILES,
        "--sbom-files",
        envvar="INPUT_SBOM_FILES",
        help="Comma-separated glob patterns for SBOM files.",
    ),
    output_dir: str = typer.Option(
        str(DEFAULT_OUTPUT_DIR),
        "--output-dir",
        envvar="INPUT_OUTPUT_DIR",
        help="Directory for parse-sboms.json and index.html (relative to --root).",
    ),
    title: str = typer.Option(DEFAULT_TITLE, "--title", envvar="INPUT_TITLE", help="Dashboard title."),
    theme: str = typer.Option(DEFAULT_THEME, "--theme", envvar="INPUT_THEME", help="dark or light."),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        exists=True,
        file_okay=False,
        resolve_path=True,
        help="Repository root to search from (default: current directory).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and skip the summary."),
) -> None:
    """
    Parse SBOM files and write the dashboard data and page.

    Files that fail to parse are reported and skipped; only an unusable
    output directory makes the command fail.
    """
    configure_logging(verbose=verbose, quiet=quiet)
    config = _config_from_options(sbom_files, output_dir, title, theme, root or Path.cwd())

    logger.info("SBOM Files Pattern: %s", config.sbom_files)
    logger.info("Output Directory: %s", config.output_dir)
    logger.info("Title: %s", config.title)
    logger.info("Theme: %s", config.theme)

    try:
        report = run_pipeline(config)
    except OutputDirectoryError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    write_action_outputs(config)
    if not quiet:
        print_report(report)
    typer.echo(f"SBOM UI generated in: {config.output_path}")


def main() -> None:
    """Entry point for `sbom-dashboard` and `python -m sbomdash.main`."""
    app()


if __name__ == "__main__":
    main()
