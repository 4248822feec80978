"""
Pipeline driver: discover SBOM files, parse them, aggregate, and write the output.

Files are processed one at a time in sorted path order, so the same inputs
always give the same parse-sboms.json (apart from generatedAt). Per-file
problems become Diagnostics; only an unusable output directory aborts the run.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from sbomdash.aggregate import aggregate, count_severities
from sbomdash.config import OUTPUT_JSON_NAME, Config, get_parser_for
from sbomdash.context import SbomContext, load_contexts
from sbomdash.errors import OutputDirectoryError
from sbomdash.findings.models import (
    Dataset,
    Diagnostic,
    ParsedResult,
    PipelineReport,
    VulnerabilityRecord,
)
from sbomdash.reporting.html import write_dashboard
from sbomdash.sample_data import build_sample_result
from sbomdash.traversal import discover_sbom_files

logger = logging.getLogger(__name__)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def prepare_output_dir(config: Config) -> Path:
    """
    Create the output directory if needed and return it.

    Raises:
        OutputDirectoryError: if no directory is configured or it cannot be created.
    """
    if config.output_dir is None:
        raise OutputDirectoryError(
            "Output directory is not specified. Please provide output-dir input."
        )
    output_dir = config.output_path
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Cannot create output directory {output_dir}: {e}") from e
    return output_dir


def _dataset_sort_key(dataset: Dataset) -> Tuple[str, str]:
    # Case-insensitive, lower case before upper case on ties.
    return (dataset.id.casefold(), dataset.id.swapcase())


def build_result(
    datasets: Sequence[Dataset],
    items: Sequence[VulnerabilityRecord],
    generated_at: str,
) -> ParsedResult:
    """Assemble a ParsedResult: datasets sorted by id, items kept in order, metrics computed."""
    overall, metrics = aggregate(items)
    return ParsedResult(
        generated_at=generated_at,
        datasets=sorted(datasets, key=_dataset_sort_key),
        items=list(items),
        overall=overall,
        metrics=metrics,
    )


def _parse_context(
    context: SbomContext, config: Config
) -> Optional[Tuple[Dataset, List[VulnerabilityRecord]]]:
    parser = get_parser_for(context.path, config)
    if parser is None:
        logger.debug("No parser for %s; skipping", context.path)
        return None
    parsed = parser.parse(context)
    if not parsed.items:
        return None
    return Dataset(
        id=context.dataset_id,
        created=parsed.created,
        components=parsed.components,
        vulnerabilities=parsed.vulnerabilities,
        severity_counts=count_severities(parsed.items),
    ), parsed.items


def parse_sbom_files(
    files: Sequence[Path],
    config: Config,
    generated_at: Optional[str] = None,
) -> Tuple[ParsedResult, int, List[Diagnostic]]:
    """
    Parse every file and build the combined result.

    Returns:
        (result, files_parsed, diagnostics). A file counts as parsed when it
        was read and handed to a parser without error, even if it produced no
        records. Only files with at least one record get a dataset entry.
    """
    contexts, diagnostics = load_contexts(list(files), root=config.root)

    datasets: List[Dataset] = []
    items: List[VulnerabilityRecord] = []
    files_parsed = 0
    for context in contexts:
        try:
            outcome = _parse_context(context, config)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Failed to parse %s: %s", context.path, e)
            diagnostics.append(Diagnostic(path=context.path, message=str(e)))
            continue
        files_parsed += 1
        if outcome is None:
            continue
        dataset, records = outcome
        datasets.append(dataset)
        items.extend(records)

    result = build_result(datasets, items, generated_at or utc_timestamp())
    return result, files_parsed, diagnostics


def write_parsed_data(result: ParsedResult, output_dir: Path) -> Path:
    """Write parse-sboms.json into output_dir and return its path."""
    output_file = output_dir / OUTPUT_JSON_NAME
    try:
        output_file.write_text(result.to_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise OutputDirectoryError(f"Cannot write {output_file}: {e}") from e
    logger.info("Parsed data written to %s", output_file)
    return output_file


def run_pipeline(config: Config, generated_at: Optional[str] = None) -> PipelineReport:
    """
    Run discovery, parsing, aggregation and output for one configuration.

    When no SBOM files are found, the fixed sample result is written instead
    so the dashboard always has a well-formed document.

    Raises:
        OutputDirectoryError: when the output directory cannot be created or written.
    """
    output_dir = prepare_output_dir(config)
    generated_at = generated_at or utc_timestamp()

    files = discover_sbom_files(
        config.sbom_files,
        root=config.root,
        ignore_dirs=config.ignore_dirs,
        exclude_dir=output_dir,
    )
    logger.info("Found %d SBOM file(s)", len(files))

    if not files:
        logger.warning("No SBOM files found. Creating example with sample data.")
        report = PipelineReport(result=build_sample_result(generated_at), used_sample_data=True)
    else:
        result, files_parsed, diagnostics = parse_sbom_files(files, config, generated_at)
        report = PipelineReport(
            result=result,
            files_found=len(files),
            files_parsed=files_parsed,
            files_failed=len(diagnostics),
            diagnostics=diagnostics,
        )

    report.output_file = write_parsed_data(report.result, output_dir)
    write_dashboard(report.result, output_dir, title=config.title, theme=config.theme)

    logger.info(
        "Processed %d file(s): %d parsed, %d failed, %d record(s) in %d dataset(s)",
        report.files_found,
        report.files_parsed,
        report.files_failed,
        len(report.result.items),
        len(report.result.datasets),
    )
    return report
