"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from typing import Any, NewType, TypeAlias

NodeID = NewType("NodeID", str)
"""Node identifier inside a process export (e.g., '64f1c0a2...')"""

VariableName = NewType("VariableName", str)
"""Harvested input variable name, always a valid identifier (e.g., 'userId')"""

JSONValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None
"""Decoded JSON value as produced by json.loads()."""

PropertySchema: TypeAlias = dict[str, Any]
"""JSON Schema fragment for a single property (e.g., {'type': 'integer'})."""
