"""Unit tests for CVSS rating selection."""

from sbomdash.cvss import pick_cvss


def test_empty_and_none_ratings():
    assert pick_cvss([]) is None
    assert pick_cvss(None) is None


def test_highest_score_wins():
    ratings = [
        {"score": 5.3, "severity": "medium", "method": "CVSSv31"},
        {"score": 9.8, "severity": "critical", "method": "CVSSv31"},
        {"score": 7.5, "severity": "high", "method": "CVSSv2"},
    ]
    pick = pick_cvss(ratings)
    assert pick.score == 9.8
    assert pick.severity == "CRITICAL"
    assert pick.method == "CVSSv31"


def test_alternate_field_names():
    """baseScore / baseSeverity are accepted when score / severity are missing."""
    pick = pick_cvss([{"baseScore": 9.1, "baseSeverity": "CRITICAL"}])
    assert pick.score == 9.1
    assert pick.severity == "CRITICAL"


def test_tie_keeps_first_seen():
    ratings = [
        {"score": 7.5, "severity": "high", "source": {"name": "nvd"}},
        {"score": 7.5, "severity": "high", "source": {"name": "ghsa"}},
    ]
    pick = pick_cvss(ratings)
    assert pick.method == {"name": "nvd"}


def test_entries_without_score_or_severity_are_skipped():
    ratings = [{"method": "other"}, {"vector": "AV:N"}]
    assert pick_cvss(ratings) is None


def test_severity_only_rating_has_null_score():
    """A missing score compares as 0 but stays None in the result."""
    pick = pick_cvss([{"severity": "low"}])
    assert pick.score is None
    assert pick.severity == "LOW"


def test_scored_rating_beats_unscored_one():
    pick = pick_cvss([{"severity": "critical"}, {"score": 4.0, "severity": "medium"}])
    assert pick.score == 4.0


def test_zero_score_does_not_replace_unscored_first():
    """0 is not strictly greater than a missing score, so the first entry stays."""
    pick = pick_cvss([{"severity": "high"}, {"score": 0, "severity": "none"}])
    assert pick.severity == "HIGH"
    assert pick.score is None


def test_pick_never_below_max_score():
    ratings = [{"score": s} for s in (3.1, 8.8, 2.0, 8.8, 6.5)]
    pick = pick_cvss(ratings)
    assert pick.score == max(r["score"] for r in ratings)


def test_numeric_string_score_is_coerced():
    pick = pick_cvss([{"score": "6.1", "severity": "medium"}])
    assert pick.score == 6.1
