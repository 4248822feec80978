# Fixed example result written when no SBOM files are found, so the dashboard always has data.

from __future__ import annotations

from typing import Optional

from sbomdash.findings.models import (
    Dataset,
    Metrics,
    Overall,
    ParsedResult,
    TopCVE,
    VulnerabilityRecord,
)

SAMPLE_DATASET_ID = "sample"

SAMPLE_SEVERITY_COUNTS = {"CRITICAL": 1, "HIGH": 2, "MEDIUM": 0, "LOW": 0, "INFO": 0, "UNKNOWN": 0}


def build_sample_result(now: str, created: Optional[str] = None) -> ParsedResult:
    """
    Return the example ParsedResult.

    All counts are literals rather than computed from the items, so the
    dataset and overall blocks intentionally describe three vulnerabilities
    while only two sample records are listed.

    Args:
        now: ISO timestamp used for generatedAt.
        created: Dataset creation time; defaults to `now`.
    """
    items = [
        VulnerabilityRecord(
            dataset=SAMPLE_DATASET_ID,
            id="CVE-2024-12345",
            title="Sample Critical Vulnerability",
            severity="CRITICAL",
            severity_rank=4,
            cvss=9.8,
            component="sample-library",
            version="1.0.0",
            purl="pkg:npm/sample-library@1.0.0",
            licenses=["MIT"],
            direct=True,
        ),
        VulnerabilityRecord(
            dataset=SAMPLE_DATASET_ID,
            id="CVE-2024-12346",
            title="Sample High Vulnerability",
            severity="HIGH",
            severity_rank=3,
            cvss=7.5,
            component="another-library",
            version="2.1.0",
            purl="pkg:npm/another-library@2.1.0",
            licenses=["Apache-2.0"],
            direct=True,
            fixed_versions=["2.2.0"],
        ),
    ]
    return ParsedResult(
        generated_at=now,
        datasets=[
            Dataset(
                id=SAMPLE_DATASET_ID,
                created=created or now,
                components=5,
                vulnerabilities=3,
                severity_counts=dict(SAMPLE_SEVERITY_COUNTS),
            )
        ],
        items=items,
        overall=Overall(total=3, severity_counts=dict(SAMPLE_SEVERITY_COUNTS)),
        metrics=Metrics(
            fix_availability_rate=33,
            top_cves=[
                TopCVE(id="CVE-2024-12345", count=1, datasets=[SAMPLE_DATASET_ID], max_cvss=9.8, worst_severity_rank=4),
                TopCVE(id="CVE-2024-12346", count=1, datasets=[SAMPLE_DATASET_ID], max_cvss=7.5, worst_severity_rank=3),
            ],
        ),
    )
