# Severity classification: map free-form severity labels to a sortable rank.

from __future__ import annotations

from typing import Optional, Sequence, Tuple

# Lower-cased label -> rank. Anything not listed ranks 0.
SEVERITY_RANKS: Sequence[Tuple[str, int]] = (
    ("critical", 4),
    ("high", 3),
    ("medium", 2),
    ("low", 1),
    ("info", 0),
    ("none", 0),
    ("unknown", 0),
)


def severity_rank(severity: Optional[str]) -> int:
    """
    Return the rank for a severity label, case-insensitively.

    Unrecognized, empty or None input ranks 0.

    Examples:
        >>> severity_rank("HIGH")
        3
        >>> severity_rank("moderate")
        0
    """
    label = str(severity or "").lower()
    for name, rank in SEVERITY_RANKS:
        if name == label:
            return rank
    return 0


def normalize_severity(severity: Optional[str], default: str = "UNKNOWN") -> str:
    """Upper-case a severity label, substituting `default` when it is empty."""
    return str(severity or default).upper()
