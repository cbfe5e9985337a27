# src/flowschema/core/graph/builder.py
"""Process graph construction from platform exports.

Contains parse_process() - the only way process documents become
ProcessGraph instances. graph.py keeps the query and traversal methods;
ProcessGraph.from_process() is a thin facade over this module.

Accepted document shapes:
    {"nodes": [...]}
    {"scheme": {"nodes": [...]}}
    [<either of the above>, ...]     (first element used)
    '<any of the above as a JSON string>'
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any

import structlog

from flowschema.contracts.errors import GraphIntegrityError, ProcessParseError
from flowschema.contracts.types import NodeID
from flowschema.core.graph.graph import ProcessGraph
from flowschema.core.graph.models import Node, Transition

logger = structlog.get_logger(__name__)


def parse_process(process: Any) -> ProcessGraph:
    """Build a ProcessGraph from a process export.

    Args:
        process: Decoded process document (dict or list), or a str/bytes
            holding the JSON text of one.

    Returns:
        ProcessGraph indexed by node id.

    Raises:
        ProcessParseError: Document cannot be decoded, has a missing or
            empty node list, or contains node/transition entries of the
            wrong JSON type
        GraphIntegrityError: Two nodes share an identifier
    """
    document = _decode_document(process)
    raw_nodes = _locate_node_list(document)
    if not raw_nodes:
        raise ProcessParseError("process.scheme.nodes (or nodes) is empty")

    nodes = [_parse_node(raw, index) for index, raw in enumerate(raw_nodes)]

    counts = Counter(node.node_id for node in nodes)
    duplicates = tuple(sorted(node_id for node_id, count in counts.items() if count > 1))
    if duplicates:
        raise GraphIntegrityError(
            f"Process contains duplicate node ids: {', '.join(duplicates)}",
            node_ids=duplicates,
        )

    graph = ProcessGraph(nodes)
    logger.debug("process_parsed", node_count=graph.node_count, edge_count=graph.edge_count)
    return graph


def _decode_document(process: Any) -> dict[str, Any]:
    """Decode embedded JSON and unwrap the array fallback."""
    if isinstance(process, bytes | bytearray):
        try:
            process = process.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProcessParseError(f"process is not valid UTF-8: {e}") from e

    if isinstance(process, str):
        try:
            process = json.loads(process)
        except json.JSONDecodeError as e:
            raise ProcessParseError(f"process must be valid JSON object: {e.msg} (line {e.lineno}, column {e.colno})") from e

    match process:
        case dict():
            return process
        case [dict() as first, *_]:
            return first
        case []:
            raise ProcessParseError("process array is empty")
        case list():
            raise ProcessParseError(f"process array must contain objects, got {type(process[0]).__name__}")
        case _:
            raise ProcessParseError(f"process must be valid JSON object, got {type(process).__name__}")


def _locate_node_list(document: dict[str, Any]) -> list[Any]:
    """Return the node list, preferring a non-empty direct ``nodes`` field."""
    direct = document.get("nodes")
    if isinstance(direct, list) and direct:
        return direct

    scheme = document.get("scheme")
    if isinstance(scheme, dict):
        nested = scheme.get("nodes")
        if isinstance(nested, list):
            return nested

    if isinstance(direct, list):
        return direct

    raise ProcessParseError("process.scheme.nodes (or nodes) is missing")


def _parse_node(raw: Any, index: int) -> Node:
    if not isinstance(raw, dict):
        raise ProcessParseError(f"nodes[{index}] must be an object, got {type(raw).__name__}")

    node_id = raw.get("id")
    if not isinstance(node_id, str):
        raise ProcessParseError(f"nodes[{index}].id must be a string, got {type(node_id).__name__}")

    title = raw.get("title")
    obj_type = raw.get("obj_type")

    return Node(
        node_id=NodeID(node_id),
        title=title if isinstance(title, str) else "",
        obj_type=obj_type if isinstance(obj_type, int) and not isinstance(obj_type, bool) else None,
        transitions=_parse_transitions(raw, node_id),
    )


def _parse_transitions(raw: dict[str, Any], node_id: str) -> tuple[Transition, ...]:
    """Collect logics (direct, else from condition) followed by semaphors."""
    condition = raw.get("condition")
    if not isinstance(condition, dict):
        condition = {}

    logics = _as_list(raw.get("logics"), f"{node_id}.logics")
    if not logics:
        logics = _as_list(condition.get("logics"), f"{node_id}.condition.logics")
    semaphors = _as_list(condition.get("semaphors"), f"{node_id}.condition.semaphors")

    transitions: list[Transition] = []
    for position, entry in enumerate([*logics, *semaphors]):
        if not isinstance(entry, dict):
            raise ProcessParseError(f"node '{node_id}' transition {position} must be an object, got {type(entry).__name__}")
        transitions.append(Transition.from_raw(entry))
    return tuple(transitions)


def _as_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProcessParseError(f"{where} must be an array, got {type(value).__name__}")
    return value
