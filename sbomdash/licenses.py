# License extraction: flatten CycloneDX license choices into plain names.

from __future__ import annotations

from typing import Any, List

from sbomdash.fields import dig

# Tried in order per entry; the first non-empty one wins.
LICENSE_FIELDS = (
    ("license", "id"),
    ("license", "name"),
    ("expression",),
)


def license_names(licenses: Any) -> List[str]:
    """
    Return one name per license entry that carries an id, name or expression.

    Non-list input gives []. Entries with none of those fields are dropped.

    Examples:
        >>> license_names([{"license": {"id": "MIT"}}, {"expression": "A OR B"}])
        ['MIT', 'A OR B']
    """
    if not isinstance(licenses, list):
        return []
    names: List[str] = []
    for entry in licenses:
        for path in LICENSE_FIELDS:
            value = dig(entry, *path)
            if value:
                names.append(str(value))
                break
    return names
