"""Shared contracts: enums, semantic types, and error descriptors.

Leaf package - nothing here imports from flowschema.core or flowschema.engine.
"""

from flowschema.contracts.enums import (
    ErrorCode,
    OutputField,
    TransitionKind,
)
from flowschema.contracts.errors import (
    ErrorInfo,
    ErrorPayload,
    FlowSchemaError,
    GraphIntegrityError,
    ProcessParseError,
)
from flowschema.contracts.types import (
    JSONValue,
    NodeID,
    PropertySchema,
    VariableName,
)

__all__ = [
    "ErrorCode",
    "ErrorInfo",
    "ErrorPayload",
    "FlowSchemaError",
    "GraphIntegrityError",
    "JSONValue",
    "NodeID",
    "OutputField",
    "ProcessParseError",
    "PropertySchema",
    "TransitionKind",
    "VariableName",
]
