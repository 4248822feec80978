# Rich console output: summarize a pipeline run for the CI log.

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sbomdash.findings.models import SEVERITY_LABELS, PipelineReport

# Severity → Rich style
SEVERITY_STYLE = {
    "CRITICAL": "bold red",
    "HIGH": "bold orange3",
    "MEDIUM": "bold yellow",
    "LOW": "bold green",
    "INFO": "bold blue",
    "UNKNOWN": "bold dim",
}

DEFAULT_SEVERITY_STYLE = "bold white"

RANK_LABELS = {4: "CRITICAL", 3: "HIGH", 2: "MEDIUM", 1: "LOW"}


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.upper(), DEFAULT_SEVERITY_STYLE)


def print_report(report: PipelineReport, console: Optional[Console] = None) -> None:
    """
    Print a run summary: datasets, top CVEs, failed files and overall counts.
    Sample-data runs are flagged so they are not mistaken for a clean result.
    """
    console = console or Console()
    result = report.result

    if report.used_sample_data:
        console.print(
            Panel(
                "[yellow]No SBOM files found; wrote sample data.[/yellow]",
                title="SBOM Dashboard",
                border_style="yellow",
                box=box.ROUNDED,
            )
        )

    if result.datasets:
        _print_datasets_table(report, console)

    if result.metrics.top_cves:
        _print_top_cves_table(report, console)

    if report.diagnostics:
        _print_diagnostics(report, console)

    _print_summary(report, console)


def _print_datasets_table(report: PipelineReport, console: Console) -> None:
    table = Table(
        title="Datasets",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("Dataset", style="white")
    table.add_column("Components", justify="right")
    table.add_column("Vulns", justify="right")
    for label in SEVERITY_LABELS:
        table.add_column(label[:4], justify="right", style=_severity_style(label))

    for dataset in report.result.datasets:
        table.add_row(
            dataset.id,
            str(dataset.components),
            str(dataset.vulnerabilities),
            *(str(dataset.severity_counts.get(label, 0)) for label in SEVERITY_LABELS),
        )

    console.print()
    console.print(table)


def _print_top_cves_table(report: PipelineReport, console: Console) -> None:
    table = Table(
        title="Top CVEs",
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE,
        padding=(0, 1),
    )
    table.add_column("CVE", style="white")
    table.add_column("Severity", width=10)
    table.add_column("Count", justify="right", width=6)
    table.add_column("Max CVSS", justify="right", width=8)
    table.add_column("Datasets", style="dim")

    for entry in report.result.metrics.top_cves:
        label = RANK_LABELS.get(entry.worst_severity_rank, "UNKNOWN")
        table.add_row(
            entry.id,
            Text(label, style=_severity_style(label)),
            str(entry.count),
            "-" if entry.max_cvss is None else f"{entry.max_cvss:.1f}",
            ", ".join(entry.datasets),
        )

    console.print()
    console.print(table)


def _print_diagnostics(report: PipelineReport, console: Console) -> None:
    console.print()
    for diag in report.diagnostics:
        console.print(f"  [bold yellow]{diag.level.upper()}[/bold yellow] {diag.path}: {diag.message}")


def _print_summary(report: PipelineReport, console: Console) -> None:
    """Print a compact summary of the run."""
    result = report.result
    total = result.overall.total
    summary_parts = [
        f"[bold]{report.files_found} file{'s' if report.files_found != 1 else ''} found[/bold]",
        f"{report.files_parsed} parsed",
    ]
    if report.files_failed:
        summary_parts.append(f"[bold red]{report.files_failed} failed[/bold red]")
    summary_parts.append(f"[bold]{total} vulnerabilit{'ies' if total != 1 else 'y'}[/bold]")
    for label in SEVERITY_LABELS:
        count = result.overall.severity_counts.get(label, 0)
        if count:
            summary_parts.append(f"[{_severity_style(label)}]{count} {label.lower()}[/]")
    summary_parts.append(f"fix available {result.metrics.fix_availability_rate}%")

    if report.files_failed:
        border = "red"
    elif total > 0:
        border = "yellow"
    else:
        border = "green"

    console.print()
    console.print(
        Panel(
            " | ".join(summary_parts),
            title="Summary",
            border_style=border,
            box=box.ROUNDED,
        )
    )
