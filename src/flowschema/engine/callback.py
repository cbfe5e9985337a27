# src/flowschema/engine/callback.py
"""Platform callback harness.

The platform invokes the callback with a JSON object and reads the same
object back. Inputs may sit at the top level or under ``data``:

    {"aiNodeId": "...", "process": {...}, "includeUrlVars": false}
    {"data": {"aiNodeId": "...", "process": {...}}, ...}

The harness augments that object in place: ``meta`` plus the schema on
success, ``error`` on failure. Fields it does not recognise are left alone.
"""

from __future__ import annotations

from typing import Any, Final

from flowschema.contracts.enums import OutputField
from flowschema.core.config import FlowSchemaSettings
from flowschema.core.logging import get_logger
from flowschema.engine.orchestrator import GenerationResult, Orchestrator

logger = get_logger(__name__)

AI_NODE_ID_KEY: Final = "aiNodeId"
PROCESS_KEY: Final = "process"
INCLUDE_URL_VARS_KEY: Final = "includeUrlVars"
NESTED_DATA_KEY: Final = "data"


def select_payload(data: dict[str, Any]) -> dict[str, Any]:
    """Return the object that carries the inputs.

    ``data["data"]`` wins only when it is an object that actually holds a
    ``process`` key; otherwise the top level is used.
    """
    nested = data.get(NESTED_DATA_KEY)
    if isinstance(nested, dict) and PROCESS_KEY in nested:
        return nested
    return data


def handle_callback(
    data: dict[str, Any],
    settings: FlowSchemaSettings | None = None,
    *,
    orchestrator: Orchestrator | None = None,
) -> dict[str, Any]:
    """Run schema generation for a callback payload.

    Args:
        data: Decoded callback payload (mutated in place)
        settings: Settings to use when no orchestrator is given
        orchestrator: Pre-built orchestrator (its settings take precedence)

    Returns:
        The same ``data`` object, augmented.

    Raises:
        TypeError: If data is not a dict (a harness bug, not a payload error)
    """
    if not isinstance(data, dict):
        raise TypeError(f"callback data must be a dict, got {type(data).__name__}")

    if orchestrator is None:
        orchestrator = Orchestrator(settings)
    settings = orchestrator.settings

    payload = select_payload(data)
    include_url_vars = payload.get(INCLUDE_URL_VARS_KEY)
    if not isinstance(include_url_vars, bool):
        if include_url_vars is not None:
            logger.debug("include_url_vars_ignored", value_type=type(include_url_vars).__name__)
        include_url_vars = None

    result = orchestrator.run(
        payload.get(AI_NODE_ID_KEY),
        payload.get(PROCESS_KEY),
        include_url_vars=include_url_vars,
    )
    apply_result(payload, result, settings)
    return data


def apply_result(payload: dict[str, Any], result: GenerationResult, settings: FlowSchemaSettings) -> None:
    """Write a generation result into the payload object."""
    if result.error is not None:
        payload["error"] = result.error.to_dict()
        return

    assert result.meta is not None  # ok results always carry meta
    payload["meta"] = result.meta.to_dict()

    match settings.output_field:
        case OutputField.STRUCTURED_OUTPUT_RSP:
            payload[OutputField.STRUCTURED_OUTPUT_RSP.value] = {"status": "ok", "schema": result.schema}
            payload.pop(OutputField.SCHEMA.value, None)
        case OutputField.SCHEMA:
            payload[OutputField.SCHEMA.value] = result.schema
            payload.pop(OutputField.STRUCTURED_OUTPUT_RSP.value, None)

    payload.pop("error", None)

    if settings.unwrap_content_properties:
        _unwrap_content_properties(payload)


def _unwrap_content_properties(payload: dict[str, Any]) -> None:
    """Replace ``content`` with ``content.properties`` when both are objects."""
    content = payload.get("content")
    if isinstance(content, dict):
        properties = content.get("properties")
        if isinstance(properties, dict):
            payload["content"] = properties
