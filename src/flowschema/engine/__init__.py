"""Generation engine: orchestration and the platform callback harness.

Example:
    from flowschema.engine import handle_callback

    payload = {"aiNodeId": "ai", "process": {"nodes": [...]}}
    handle_callback(payload)
    payload["meta"]["vars"]
"""

from flowschema.engine.callback import apply_result, handle_callback, select_payload
from flowschema.engine.orchestrator import (
    GenerationMeta,
    GenerationResult,
    Orchestrator,
    run_generation,
)

__all__ = [
    "GenerationMeta",
    "GenerationResult",
    "Orchestrator",
    "apply_result",
    "handle_callback",
    "run_generation",
    "select_payload",
]
