"""Attribute adaptation.

Callers pass any number of mappings; backends get a flat dict of strings.
Mappings are applied in order, so a key repeated later overwrites the
earlier value.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from sig.caller import CallerIdentity

Attributes = Mapping[str, Any]


def flatten(mappings: Iterable[Attributes | None]) -> dict[str, str]:
    """Merge ``mappings`` left to right, rendering every value with ``str``."""
    flat: dict[str, str] = {}
    for mapping in mappings:
        if not mapping:
            continue
        for key, value in mapping.items():
            flat[str(key)] = str(value)
    return flat


def identity_attributes(identity: CallerIdentity, line: int) -> dict[str, Any]:
    """Attributes naming the call site of a log record."""
    return {"function": identity.function, "file": identity.file, "line": line}
