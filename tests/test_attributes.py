"""Attribute Adapter Tests."""

from sig.attributes import flatten, identity_attributes
from sig.caller import CallerIdentity


def test_flatten_last_write_wins():
    """Test later mappings overwrite earlier keys."""
    assert flatten([{"a": 1}, {"b": 2}, {"a": 3}]) == {"a": "3", "b": "2"}


def test_flatten_renders_values_as_strings():
    """Test scalar values are string-coerced."""
    flat = flatten([{"count": 3, "ratio": 0.5, "ok": True, "missing": None}])
    assert flat == {"count": "3", "ratio": "0.5", "ok": "True", "missing": "None"}


def test_flatten_skips_empty_mappings():
    """Test empty and None mappings contribute nothing."""
    assert flatten([{}, None, {"k": "v"}]) == {"k": "v"}
    assert flatten([]) == {}


def test_identity_attributes():
    """Test call-site attributes use the given line."""
    identity = CallerIdentity(function="m.f", file="m.py", line=1)
    assert identity_attributes(identity, 9) == {"function": "m.f", "file": "m.py", "line": 9}
