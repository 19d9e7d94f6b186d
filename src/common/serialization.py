"""Serialization utilities."""

from dataclasses import asdict, is_dataclass


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass, including nested dataclasses, to a JSON-ready dict."""
    if not is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"Expected a dataclass instance, got {type(obj).__name__}")
    return asdict(obj)
