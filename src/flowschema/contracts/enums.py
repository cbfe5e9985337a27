"""Status codes and kinds used across subsystem boundaries.

Values are part of the callback wire format; renaming one is a breaking
change for every platform process that inspects them.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes reported in the callback payload's ``error.code`` field.

    Values:
        BAD_INPUT: aiNodeId or process missing, empty, or not decodable
        AI_NODE_NOT_FOUND: No node in the process matches aiNodeId
        PROCESS_ERROR: The process decoded but a graph lookup failed
    """

    BAD_INPUT = "BAD_INPUT"
    AI_NODE_NOT_FOUND = "AI_NODE_NOT_FOUND"
    PROCESS_ERROR = "PROCESS_ERROR"


class TransitionKind(StrEnum):
    """Transition kinds with special meaning to the orchestrator.

    Transition kinds are free-form strings in process exports; only the ones
    listed here are interpreted. Everything else is traversed without
    interpretation.
    """

    GO = "go"


class OutputField(StrEnum):
    """Where the generated schema is written in the callback payload."""

    STRUCTURED_OUTPUT_RSP = "structured_output_rsp"
    SCHEMA = "schema"

