"""Helpers for building JSON schemas."""

from __future__ import annotations

from typing import Any


def object_schema(*args: str) -> dict[str, Any]:
    """Build an object schema from alternating property names and descriptions.

    Every property is a string. A trailing name without a description is ignored.
    """
    properties: dict[str, Any] = {}
    for name, description in zip(args[::2], args[1::2]):
        properties[name] = {"description": description, "type": "string"}
    return {"type": "object", "properties": properties}