"""
Aggregate metrics over normalized vulnerability records.

Everything here is a pure function of the record list: severity counts, the
fix availability rate, and the top-CVE ranking used by the dashboard.
"""

from __future__ import annotations

import re
from functools import reduce
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from sbomdash.findings.models import (
    Metrics,
    Overall,
    TopCVE,
    VulnerabilityRecord,
    empty_severity_counts,
)

CVE_ID_PATTERN = re.compile(r"CVE-\d{4}-\d{4,}", re.ASCII)

TOP_CVE_LIMIT = 10


def _add_severity(counts: Mapping[str, int], record: VulnerabilityRecord) -> Dict[str, int]:
    label = (record.severity or "UNKNOWN").upper()
    return {**counts, label: counts.get(label, 0) + 1}


def count_severities(items: Sequence[VulnerabilityRecord]) -> Dict[str, int]:
    """
    Count records per upper-cased severity.

    The six canonical labels are always present. Unrecognized labels get their
    own key instead of being folded into UNKNOWN.
    """
    return reduce(_add_severity, items, empty_severity_counts())


def fix_availability_rate(items: Sequence[VulnerabilityRecord]) -> int:
    """Rounded percentage of records with at least one fixed version; 0 for no records."""
    if not items:
        return 0
    with_fix = sum(1 for item in items if item.fixed_versions)
    # Half-up, not banker's rounding, so 50.5 -> 51.
    return int(100 * with_fix / len(items) + 0.5)


def _merge_cve(acc: Dict[str, TopCVE], record: VulnerabilityRecord) -> Dict[str, TopCVE]:
    cve_id = record.id or ""
    if not CVE_ID_PATTERN.fullmatch(cve_id):
        return acc
    current = acc.get(cve_id) or TopCVE(id=cve_id)

    max_cvss: Optional[float] = current.max_cvss
    if record.cvss is not None:
        max_cvss = record.cvss if max_cvss is None else max(max_cvss, record.cvss)

    datasets = current.datasets
    if record.dataset not in datasets:
        datasets = datasets + [record.dataset]

    updated = TopCVE(
        id=cve_id,
        count=current.count + 1,
        datasets=datasets,
        max_cvss=max_cvss,
        worst_severity_rank=max(current.worst_severity_rank, record.severity_rank),
    )
    # acc is the fresh dict build_top_cves starts the fold with.
    acc[cve_id] = updated
    return acc


def _ranking_key(entry: TopCVE) -> Tuple[int, int, float]:
    return (-entry.worst_severity_rank, -entry.count, -(entry.max_cvss or 0))


def build_top_cves(
    items: Sequence[VulnerabilityRecord], limit: int = TOP_CVE_LIMIT
) -> List[TopCVE]:
    """
    Rank CVE ids by worst severity, then occurrences, then max CVSS.

    Only ids matching CVE-YYYY-NNNN+ take part. At most `limit` entries are
    returned, each with its dataset ids sorted.
    """
    grouped: Dict[str, TopCVE] = reduce(_merge_cve, items, {})
    ranked = sorted(grouped.values(), key=_ranking_key)
    return [
        entry.model_copy(update={"datasets": sorted(entry.datasets)})
        for entry in ranked[:limit]
    ]


def aggregate(items: Sequence[VulnerabilityRecord]) -> Tuple[Overall, Metrics]:
    """Compute the overall block and the metrics block of a ParsedResult."""
    overall = Overall(total=len(items), severity_counts=count_severities(items))
    metrics = Metrics(
        fix_availability_rate=fix_availability_rate(items),
        top_cves=build_top_cves(items),
    )
    return overall, metrics
