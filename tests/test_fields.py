"""Tests for the ordered field accessors."""

from sbomdash.fields import as_float, as_list, dig, first_not_none, first_value


def test_first_value_skips_none_and_empty_string():
    data = {"bom-ref": "", "bomRef": None, "purl": "pkg:npm/a@1"}
    assert first_value(data, ("bom-ref", "bomRef", "purl")) == "pkg:npm/a@1"


def test_first_value_keeps_empty_list():
    assert first_value({"ratings": [], "cvss": [{"score": 1}]}, ("ratings", "cvss")) == []


def test_first_not_none_keeps_zero():
    assert first_not_none({"score": 0, "baseScore": 5}, ("score", "baseScore")) == 0


def test_non_mapping_input():
    assert first_value(None, ("a",)) is None
    assert first_not_none(["a"], ("a",)) is None
    assert dig("text", "a") is None


def test_dig():
    assert dig({"a": {"b": {"c": 1}}}, "a", "b", "c") == 1
    assert dig({"a": {"b": None}}, "a", "b", "c") is None


def test_as_float():
    assert as_float(7) == 7.0
    assert as_float("9.8") == 9.8
    assert as_float("n/a") is None
    assert as_float(True) is None
    assert as_float(None) is None


def test_as_list():
    assert as_list(None) == []
    assert as_list("1.2.3") == ["1.2.3"]
    assert as_list(["a", "b"]) == ["a", "b"]
