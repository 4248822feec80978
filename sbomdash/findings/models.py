# Pydantic data models for normalized SBOM output: records, datasets, metrics, diagnostics.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SEVERITY_LABELS = ("CRITICAL", "HIGH", "MEDIUM", "LOW", "INFO", "UNKNOWN")


def empty_severity_counts() -> Dict[str, int]:
    """Return a fresh zero-filled map of the six canonical severity labels."""
    return {label: 0 for label in SEVERITY_LABELS}


class _Model(BaseModel):
    # Serialized names are camelCase; Python code may use either form.
    model_config = ConfigDict(populate_by_name=True)


class VulnerabilityRecord(_Model):
    """One vulnerability joined with one affected component."""

    dataset: str
    id: Optional[str] = None
    title: str = "Vulnerability"
    severity: str = "UNKNOWN"
    severity_rank: int = Field(0, alias="severityRank")
    cvss: Optional[float] = None
    component: Optional[str] = None
    version: Optional[str] = None
    purl: Optional[str] = None
    licenses: List[str] = Field(default_factory=list)
    direct: bool = True
    cwes: List[Union[int, str]] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)
    fixed_versions: List[str] = Field(default_factory=list, alias="fixedVersions")

    @property
    def has_fix(self) -> bool:
        return bool(self.fixed_versions)


class CvssPick(_Model):
    """The rating chosen from a vulnerability's ratings list."""

    score: Optional[float] = None
    severity: str = ""
    method: Optional[Any] = None


class ParsedDocument(_Model):
    """What a format parser extracts from a single SBOM file."""

    created: Optional[str] = None
    components: int = 0
    vulnerabilities: int = 0
    items: List[VulnerabilityRecord] = Field(default_factory=list)


class Dataset(_Model):
    """Per-file aggregate shown as one group in the dashboard."""

    id: str
    created: Optional[str] = None
    components: int = 0
    vulnerabilities: int = 0
    severity_counts: Dict[str, int] = Field(
        default_factory=empty_severity_counts, alias="severityCounts"
    )


class Overall(_Model):
    total: int = 0
    severity_counts: Dict[str, int] = Field(
        default_factory=empty_severity_counts, alias="severityCounts"
    )


class TopCVE(_Model):
    id: str
    count: int = 0
    datasets: List[str] = Field(default_factory=list)
    max_cvss: Optional[float] = Field(None, alias="maxCVSS")
    worst_severity_rank: int = Field(-1, alias="worstSeverityRank")


class Metrics(_Model):
    fix_availability_rate: int = Field(0, alias="fixAvailabilityRate")
    top_cves: List[TopCVE] = Field(default_factory=list, alias="topCVEs")


class ParsedResult(_Model):
    """
    Top-level artifact consumed by the dashboard (parse-sboms.json).

    Keys on the wire are exactly generatedAt, datasets, items, overall, metrics.
    """

    generated_at: str = Field(..., alias="generatedAt")
    datasets: List[Dataset] = Field(default_factory=list)
    items: List[VulnerabilityRecord] = Field(default_factory=list)
    overall: Overall = Field(default_factory=Overall)
    metrics: Metrics = Field(default_factory=Metrics)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "ParsedResult":
        return cls.model_validate(json.loads(text))


class Diagnostic(BaseModel):
    """A non-fatal problem encountered while processing one file."""

    path: Path
    message: str
    level: str = Field(default="warning", description="warning or error")

    model_config = {"arbitrary_types_allowed": True}


class PipelineReport(BaseModel):
    """Everything a pipeline run produced, including per-file diagnostics."""

    result: ParsedResult
    files_found: int = 0
    files_parsed: int = 0
    files_failed: int = 0
    used_sample_data: bool = False
    output_file: Optional[Path] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}
