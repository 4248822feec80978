# CVSS selection: choose the highest-scoring rating from a vulnerability's ratings.

from __future__ import annotations

from typing import Any, Iterable, Optional

from sbomdash.fields import as_float, first_not_none, first_value
from sbomdash.findings.models import CvssPick

SCORE_KEYS = ("score", "baseScore")
SEVERITY_KEYS = ("severity", "baseSeverity")
METHOD_KEYS = ("method", "source")


def _to_pick(rating: Any) -> Optional[CvssPick]:
    """Build a candidate from one rating, or None if it has neither score nor severity."""
    score = as_float(first_not_none(rating, SCORE_KEYS))
    severity = first_value(rating, SEVERITY_KEYS)
    if score is None and not severity:
        return None
    return CvssPick(
        score=score,
        severity=str(severity or "").upper(),
        method=first_value(rating, METHOD_KEYS),
    )


def pick_cvss(ratings: Optional[Iterable[Any]]) -> Optional[CvssPick]:
    """
    Return the rating with the strictly highest score, or None.

    Ties keep the first rating seen. A missing score compares as 0 but is
    reported as None.
    """
    best: Optional[CvssPick] = None
    for rating in ratings or []:
        candidate = _to_pick(rating)
        if candidate is None:
            continue
        if best is None or (candidate.score or 0) > (best.score or 0):
            best = candidate
    return best
