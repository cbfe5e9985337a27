# src/flowschema/engine/orchestrator/core.py
"""Orchestrator: from (aiNodeId, process) to schema and metadata.

Steps:
1. Validate inputs (BAD_INPUT)
2. Parse the process into a graph (BAD_INPUT / PROCESS_ERROR)
3. Locate the AI node (AI_NODE_NOT_FOUND)
4. Start at the target of the AI node's first "go" transition
5. Traverse, synthesize, assemble metadata

Every failure is returned as an ErrorInfo on the result. Nothing here
raises for bad payload content.
"""

from __future__ import annotations

from typing import Any

from flowschema.contracts.enums import ErrorCode
from flowschema.contracts.errors import ErrorInfo, GraphIntegrityError, ProcessParseError
from flowschema.core.canonical import CANONICAL_VERSION, stable_hash
from flowschema.core.config import FlowSchemaSettings
from flowschema.core.graph import parse_process
from flowschema.core.logging import get_logger
from flowschema.core.synthesis import synthesize_schema
from flowschema.core.traversal import TraversalResult, collect_reachable
from flowschema.engine.orchestrator.types import GenerationMeta, GenerationResult

logger = get_logger(__name__)


def _is_missing(value: Any) -> bool:
    """None, a blank string, or an empty bytes/array/object."""
    match value:
        case None:
            return True
        case str():
            return not value.strip()
        case bytes() | bytearray() | list() | dict():
            return len(value) == 0
        case _:
            return False


class Orchestrator:
    """Runs schema generation for one AI node at a time.

    Holds only immutable settings; every run builds its own graph and
    accumulator, so one instance can serve concurrent callbacks.
    """

    def __init__(self, settings: FlowSchemaSettings | None = None) -> None:
        self._settings = settings or FlowSchemaSettings()

    @property
    def settings(self) -> FlowSchemaSettings:
        return self._settings

    def run(
        self,
        ai_node_id: Any,
        process: Any,
        *,
        include_url_vars: bool | None = None,
    ) -> GenerationResult:
        """Generate the input schema for the steps after an AI node.

        Args:
            ai_node_id: Identifier of the AI node (must be a non-empty string)
            process: Process export, decoded or as JSON text
            include_url_vars: Harvest url fields; None uses the settings default

        Returns:
            GenerationResult with meta and schema, or with an error
        """
        if include_url_vars is None:
            include_url_vars = self._settings.include_url_vars

        if not isinstance(ai_node_id, str) or not ai_node_id:
            return self._fail(ErrorCode.BAD_INPUT, "aiNodeId is required")
        if _is_missing(process):
            return self._fail(ErrorCode.BAD_INPUT, "process is required")

        try:
            graph = parse_process(process)
        except ProcessParseError as e:
            return self._fail(ErrorCode.BAD_INPUT, str(e), ai_node_id=ai_node_id)
        except GraphIntegrityError as e:
            return self._fail(ErrorCode.PROCESS_ERROR, str(e), ai_node_id=ai_node_id)

        if not graph.has_node(ai_node_id):
            return self._fail(ErrorCode.AI_NODE_NOT_FOUND, f"AI node not found by id: {ai_node_id}")

        start_node_id = graph.first_go_target(ai_node_id)
        traversal = (
            collect_reachable(graph, start_node_id, include_url_vars=include_url_vars)
            if start_node_id is not None
            else TraversalResult()
        )

        schema = synthesize_schema(
            traversal.properties,
            traversal.required,
            name=self._settings.schema_name,
            dialect=self._settings.schema_dialect,
        )
        meta = self._build_meta(ai_node_id, traversal, include_url_vars=include_url_vars)

        logger.info(
            "schema_generated",
            ai_node_id=ai_node_id,
            next_node_id=meta.next_node_id,
            vars_count=meta.vars_count,
            schema_hash=stable_hash(schema),
            hash_version=CANONICAL_VERSION,
        )
        return GenerationResult(meta=meta, schema=schema)

    def _build_meta(
        self,
        ai_node_id: str,
        traversal: TraversalResult,
        *,
        include_url_vars: bool,
    ) -> GenerationMeta:
        next_node = traversal.first_node
        return GenerationMeta(
            ai_node_id=ai_node_id,
            next_node_id=next_node.node_id if next_node is not None else None,
            next_node_title=next_node.title if next_node is not None else None,
            vars=tuple(traversal.required),
            include_url_vars=include_url_vars,
            reachable_node_ids=traversal.visited if self._settings.debug_meta else None,
        )

    def _fail(self, code: ErrorCode, message: str, **context: Any) -> GenerationResult:
        logger.warning("generation_failed", code=code.value, message=message, **context)
        return GenerationResult.failure(ErrorInfo(code=code, message=message))


def run_generation(
    ai_node_id: Any,
    process: Any,
    *,
    include_url_vars: bool | None = None,
    settings: FlowSchemaSettings | None = None,
) -> GenerationResult:
    """One-shot convenience wrapper around Orchestrator.run()."""
    return Orchestrator(settings).run(ai_node_id, process, include_url_vars=include_url_vars)
