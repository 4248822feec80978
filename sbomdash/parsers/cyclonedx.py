# CycloneDX parsing: join each vulnerability with its affected components into records.

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sbomdash.context import SbomContext
from sbomdash.cvss import pick_cvss
from sbomdash.fields import as_float, as_list, dig, first_value
from sbomdash.findings.models import ParsedDocument, VulnerabilityRecord
from sbomdash.licenses import license_names
from sbomdash.parsers.base import SbomParser
from sbomdash.severity import normalize_severity, severity_rank

logger = logging.getLogger(__name__)

COMPONENT_KEY_FIELDS = ("bom-ref", "bomRef", "purl")
RATINGS_FIELDS = ("ratings", "cvss")
REFERENCE_URL_PATHS = (("url",), ("source", "url"))

TITLE_MAX_LENGTH = 200
DEFAULT_TITLE = "Vulnerability"

# Scopes that mark a component as pulled in indirectly.
INDIRECT_SCOPES = frozenset({"optional", "transitive"})

# Free-text fields scanned for hints that a fix exists.
FIX_TEXT_PATHS = (
    ("analysis", "response"),
    ("analysis", "justification"),
    ("analysis", "state"),
    ("analysis", "detail"),
    ("analysis", "workaround"),
    ("recommendation",),
    ("solution",),
)

FIX_INDICATORS = (
    "update",
    "upgrade",
    "patch",
    "fix",
    "fixed",
    "resolved",
    "remediation",
    "workaround",
    "mitigation",
    "solution",
    "corrected",
    "addressed",
    "version",
    "latest",
    "newer",
    "current",
)

# Marker meaning "a fix exists" when no concrete version is known.
GENERIC_FIX = "*"


def component_key(component: Mapping[str, Any]) -> str:
    """Lookup key for a component: bom-ref, bomRef, purl, else "name@version"."""
    key = first_value(component, COMPONENT_KEY_FIELDS)
    if key:
        return str(key)
    name = component.get("name") or "component"
    version = component.get("version") or ""
    return f"{name}@{version}"


def build_component_map(components: Any) -> Dict[str, Mapping[str, Any]]:
    """Index components by component_key(); later duplicates replace earlier ones."""
    lookup: Dict[str, Mapping[str, Any]] = {}
    for component in as_list(components):
        if isinstance(component, Mapping):
            lookup[component_key(component)] = component
    return lookup


def has_fix_indicators(text: Any) -> bool:
    """True if the text mentions any FIX_INDICATORS keyword (case-insensitive)."""
    if not isinstance(text, str) or not text:
        return False
    lowered = text.lower()
    return any(indicator in lowered for indicator in FIX_INDICATORS)


def extract_fixed_versions(vulnerability: Mapping[str, Any]) -> List[str]:
    """
    Return fixed versions for a vulnerability.

    Explicit analysis.fixedIn or remediation.versions are returned as given.
    Otherwise a fix keyword in any FIX_TEXT_PATHS field, or a
    remediation.workaround, yields the generic ["*"] marker.
    """
    explicit = dig(vulnerability, "analysis", "fixedIn")
    if not explicit:
        explicit = dig(vulnerability, "remediation", "versions")
    if explicit:
        return [str(v) for v in as_list(explicit) if v is not None and v != ""]

    for path in FIX_TEXT_PATHS:
        source = dig(vulnerability, *path)
        candidates = source if isinstance(source, list) else [source]
        if any(has_fix_indicators(item) for item in candidates):
            return [GENERIC_FIX]

    if dig(vulnerability, "remediation", "workaround"):
        return [GENERIC_FIX]
    return []


def is_direct(component: Mapping[str, Any]) -> bool:
    scope = str(component.get("scope") or "").lower()
    return scope not in INDIRECT_SCOPES


def _title(vulnerability: Mapping[str, Any]) -> str:
    description = vulnerability.get("description")
    if isinstance(description, str) and description:
        return description[:TITLE_MAX_LENGTH]
    return DEFAULT_TITLE


def _cwes(vulnerability: Mapping[str, Any]) -> List[Any]:
    out = []
    for entry in as_list(vulnerability.get("cwes")):
        value = entry.get("id") if isinstance(entry, Mapping) else entry
        if value:
            out.append(value)
    return out


def _urls(vulnerability: Mapping[str, Any]) -> List[str]:
    out = []
    for reference in as_list(vulnerability.get("references")):
        for path in REFERENCE_URL_PATHS:
            url = dig(reference, *path)
            if url:
                out.append(str(url))
                break
    return out


def _affected_refs(vulnerability: Mapping[str, Any]) -> List[Optional[str]]:
    refs = [
        str(affect["ref"])
        for affect in as_list(vulnerability.get("affects"))
        if isinstance(affect, Mapping) and affect.get("ref")
    ]
    # An unaffiliated vulnerability is still reported once, without a component.
    return refs or [None]


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value else None


def _timestamp(value: Any) -> Optional[str]:
    """ISO-8601 UTC with milliseconds for YAML-decoded dates; other values as text."""
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    else:
        return _optional_str(value)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CycloneDXParser(SbomParser):
    """
    Parse CycloneDX documents (JSON or YAML) into VulnerabilityRecords.

    One record is emitted per (vulnerability, affected component) pair.
    """

    id = "cyclonedx"
    name = "CycloneDX"
    extensions = frozenset({".json", ".yaml", ".yml"})

    def parse(self, context: SbomContext) -> ParsedDocument:
        document = context.document
        if not isinstance(document, Mapping):
            logger.debug("%s is not a CycloneDX object; no records", context.path)
            return ParsedDocument()

        components = as_list(document.get("components"))
        component_map = build_component_map(components)

        items: List[VulnerabilityRecord] = []
        for vulnerability in as_list(document.get("vulnerabilities")):
            if not isinstance(vulnerability, Mapping):
                continue
            items.extend(self._records_for(vulnerability, component_map, context.dataset_id))

        created = dig(document, "metadata", "timestamp")
        logger.debug(
            "Parsed CycloneDX %s: %d component(s), %d record(s)",
            context.path,
            len(components),
            len(items),
        )
        return ParsedDocument(
            created=_timestamp(created),
            components=len(components),
            vulnerabilities=len(items),
            items=items,
        )

    def _records_for(
        self,
        vulnerability: Mapping[str, Any],
        component_map: Mapping[str, Mapping[str, Any]],
        dataset_id: str,
    ) -> List[VulnerabilityRecord]:
        rating = pick_cvss(as_list(first_value(vulnerability, RATINGS_FIELDS)))
        severity = normalize_severity(
            vulnerability.get("severity") or (rating.severity if rating else None)
        )
        shared = dict(
            dataset=dataset_id,
            id=_optional_str(vulnerability.get("id")),
            title=_title(vulnerability),
            severity=severity,
            severity_rank=severity_rank(severity),
            cvss=as_float(rating.score) if rating else None,
            cwes=_cwes(vulnerability),
            urls=_urls(vulnerability),
            fixed_versions=extract_fixed_versions(vulnerability),
        )

        records = []
        for ref in _affected_refs(vulnerability):
            component: Mapping[str, Any] = (component_map.get(ref) or {}) if ref else {}
            records.append(
                VulnerabilityRecord(
                    **shared,
                    component=_optional_str(component.get("name")),
                    version=_optional_str(component.get("version")),
                    purl=_optional_str(component.get("purl")),
                    licenses=license_names(component.get("licenses")),
                    direct=is_direct(component),
                )
            )
        return records
