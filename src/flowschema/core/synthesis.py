# src/flowschema/core/synthesis.py
"""JSON Schema assembly for harvested variables."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any, Final

from flowschema.contracts.types import PropertySchema

DEFAULT_SCHEMA_NAME: Final = "structured_output"
DEFAULT_SCHEMA_DIALECT: Final = "https://json-schema.org/draft/2020-12/schema"


def synthesize_schema(
    properties: Mapping[str, PropertySchema],
    required: Iterable[str] = (),
    *,
    name: str = DEFAULT_SCHEMA_NAME,
    dialect: str = DEFAULT_SCHEMA_DIALECT,
) -> dict[str, Any]:
    """Build the structured-output schema for a set of variables.

    The object is closed (additionalProperties false) so the AI step cannot
    invent inputs. ``required`` is sorted and de-duplicated and is omitted
    when empty; an empty ``properties`` object is a valid result.

    Args:
        properties: Variable name -> schema fragment
        required: Names to mark required; each must be a key of properties
        name: Value of the schema's ``name`` member
        dialect: Value of the schema's ``$schema`` member

    Returns:
        Schema dict. Fragments are deep copies, never the caller's objects.

    Raises:
        ValueError: A required name has no property
    """
    required_names = sorted(set(required))
    missing = [key for key in required_names if key not in properties]
    if missing:
        raise ValueError(f"required names without properties: {missing}")

    schema: dict[str, Any] = {
        "$schema": dialect,
        "name": name,
        "type": "object",
        "additionalProperties": False,
        "properties": {key: copy.deepcopy(properties[key]) for key in sorted(properties)},
    }
    if required_names:
        schema["required"] = required_names
    return schema
