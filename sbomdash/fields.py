# Ordered field accessors: SBOM producers disagree on key names, so each
# fallback chain is an explicit tuple of keys tried left to right.

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


def first_value(mapping: Any, keys: Sequence[str]) -> Any:
    """
    Return the first value under `keys` that is neither None nor "".

    Empty lists and dicts still count as present. Non-mapping input yields None.

    Examples:
        >>> first_value({"bom-ref": "", "bomRef": "a"}, ("bom-ref", "bomRef"))
        'a'
    """
    if not isinstance(mapping, Mapping):
        return None
    for key in keys:
        value = mapping.get(key)
        if value is not None and value != "":
            return value
    return None


def first_not_none(mapping: Any, keys: Sequence[str]) -> Any:
    """Like first_value() but only skips None, so 0 and "" are kept."""
    if not isinstance(mapping, Mapping):
        return None
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def dig(mapping: Any, *path: str) -> Any:
    """Follow nested keys, returning None as soon as a level is not a mapping."""
    current = mapping
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def as_float(value: Any) -> Optional[float]:
    """Coerce a score to float; booleans and non-numeric values give None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def as_list(value: Any) -> list:
    """Normalize a single value or a list to a list (None gives [])."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
