"""Tests for severity ranking and normalization."""

import pytest

from sbomdash.severity import SEVERITY_RANKS, normalize_severity, severity_rank


@pytest.mark.parametrize(
    "label, rank",
    [
        ("critical", 4),
        ("high", 3),
        ("medium", 2),
        ("low", 1),
        ("info", 0),
        ("none", 0),
        ("unknown", 0),
    ],
)
def test_known_labels(label, rank):
    assert severity_rank(label) == rank


def test_rank_is_case_insensitive():
    """HIGH, high and High all rank 3."""
    assert severity_rank("HIGH") == severity_rank("high") == severity_rank("High") == 3


def test_unknown_empty_and_none_rank_zero():
    assert severity_rank("moderate") == 0
    assert severity_rank("") == 0
    assert severity_rank(None) == 0


def test_rank_is_stable():
    for label, _ in SEVERITY_RANKS:
        assert severity_rank(label) == severity_rank(label)


def test_normalize_severity_upper_cases_and_defaults():
    assert normalize_severity("critical") == "CRITICAL"
    assert normalize_severity("moderate") == "MODERATE"
    assert normalize_severity(None) == "UNKNOWN"
    assert normalize_severity("") == "UNKNOWN"
