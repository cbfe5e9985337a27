# src/flowschema/core/schema_types.py
"""Type name to JSON Schema fragment resolution.

Process exports declare parameter types loosely (``extra_type`` values such
as "string", "Integer", "object"). This module maps them onto canonical
JSON Schema fragments and defines how two inferred fragments for the same
variable are reconciled.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from flowschema.contracts.types import PropertySchema

DEFAULT_TYPE_NAME: Final = "string"

# Factories, not shared dicts: every caller gets a fragment it may mutate.
_FRAGMENT_FACTORIES: Final[dict[str, Callable[[], PropertySchema]]] = {
    "string": lambda: {"type": "string"},
    "integer": lambda: {"type": "integer"},
    "number": lambda: {"type": "number"},
    "boolean": lambda: {"type": "boolean"},
    "array": lambda: {"type": "array", "items": {}},
    "object": lambda: {"type": "object", "additionalProperties": True},
}

KNOWN_TYPE_NAMES: Final = frozenset(_FRAGMENT_FACTORIES)


def schema_for_type(type_name: str | None) -> PropertySchema:
    """Return a fresh schema fragment for a type name.

    Lookup is exact; callers lower-case platform-declared names first.
    Unknown, empty, or missing names fall back to string.

    Examples:
        >>> schema_for_type("array")
        {'type': 'array', 'items': {}}
        >>> schema_for_type("uuid")
        {'type': 'string'}
    """
    factory = _FRAGMENT_FACTORIES.get(type_name or DEFAULT_TYPE_NAME)
    if factory is None:
        factory = _FRAGMENT_FACTORIES[DEFAULT_TYPE_NAME]
    return factory()


def _fragment_type(fragment: PropertySchema) -> str:
    value = fragment.get("type")
    return value if isinstance(value, str) else ""


def merge_property_schema(existing: PropertySchema | None, inferred: PropertySchema) -> PropertySchema:
    """Reconcile a newly inferred fragment with the one already recorded.

    Policy: default to string, but let one piece of stronger evidence win.
    - No existing fragment: the inferred one is used
    - Existing is string and inferred is a different, non-empty type: inferred wins
    - Anything else: existing is kept (first non-string type sticks)

    Examples:
        >>> merge_property_schema({"type": "string"}, {"type": "integer"})
        {'type': 'integer'}
        >>> merge_property_schema({"type": "integer"}, {"type": "string"})
        {'type': 'integer'}
        >>> merge_property_schema({"type": "integer"}, {"type": "boolean"})
        {'type': 'integer'}
    """
    if existing is None:
        return inferred

    existing_type = _fragment_type(existing)
    inferred_type = _fragment_type(inferred)
    if existing_type == DEFAULT_TYPE_NAME and inferred_type and inferred_type != DEFAULT_TYPE_NAME:
        return inferred
    return existing
