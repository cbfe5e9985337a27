"""Error contracts for schema generation.

Two layers:
- Exceptions raised by the graph layer (parse and integrity failures)
- ErrorInfo, the by-value descriptor written to the callback payload

The orchestrator is the only place that converts the former into the latter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict

from flowschema.contracts.enums import ErrorCode


class FlowSchemaError(Exception):
    """Base class for errors raised while reading a process graph."""


class ProcessParseError(FlowSchemaError, ValueError):
    """Raised when a process document cannot be turned into a graph.

    Covers undecodable JSON, a missing node list, and node or transition
    entries of the wrong JSON type. Reported as BAD_INPUT.
    """


class GraphIntegrityError(FlowSchemaError):
    """Raised when a decoded process violates a graph invariant.

    Currently raised for duplicate node identifiers, which make node lookup
    ambiguous. Reported as PROCESS_ERROR.
    """

    def __init__(self, message: str, *, node_ids: tuple[str, ...] = ()) -> None:
        self.node_ids = node_ids
        super().__init__(message)


class ErrorPayload(TypedDict):
    """Schema for the ``error`` object written to the callback payload."""

    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Error descriptor returned by value from the orchestrator."""

    code: ErrorCode
    message: str

    def to_dict(self) -> ErrorPayload:
        return {"code": self.code.value, "message": self.message}
