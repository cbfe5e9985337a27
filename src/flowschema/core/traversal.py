# src/flowschema/core/traversal.py
"""Reachability traversal: harvest variables from every node after a start node.

The walk is breadth-first over all transition kinds (go, conditional
branches, timers, semaphors, API calls). Every transition of a visited node
is harvested, whether or not its target resolves. Dangling targets are
expected in partial exports and are only logged.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from flowschema.contracts.types import NodeID, PropertySchema, VariableName
from flowschema.core.graph import Node, ProcessGraph
from flowschema.core.harvest import VariableAccumulator, harvest_transition

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TraversalResult:
    """Variables harvested from the nodes reachable from a start node.

    Attributes:
        properties: Variable name -> schema fragment
        required: Sorted, duplicate-free variable names (keys of properties)
        first_node: The start node, None when it is not in the graph
        visited: Node ids in breadth-first order, start node first
    """

    properties: dict[VariableName, PropertySchema] = field(default_factory=dict)
    required: list[VariableName] = field(default_factory=list)
    first_node: Node | None = None
    visited: tuple[NodeID, ...] = ()


def collect_reachable(
    graph: ProcessGraph,
    start_node_id: str,
    *,
    include_url_vars: bool = False,
) -> TraversalResult:
    """Harvest input variables from every node reachable from start_node_id.

    Args:
        graph: Parsed process graph
        start_node_id: Node to start from (included in the harvest)
        include_url_vars: Harvest ``url`` fields of transitions

    Returns:
        TraversalResult. Empty when the start node is not in the graph.
    """
    first_node = graph.by_id(start_node_id)
    if first_node is None:
        logger.debug("traversal_start_missing", start_node_id=start_node_id)
        return TraversalResult()

    accumulator = VariableAccumulator()
    visited = graph.bfs_order(start_node_id)

    for node_id in visited:
        node = graph.by_id(node_id)
        if node is None:  # pragma: no cover - bfs_order only yields indexed nodes
            continue
        for transition in node.transitions:
            harvest_transition(transition.raw, accumulator, include_url_vars=include_url_vars)

        dangling = graph.dangling_targets(node_id)
        if dangling:
            logger.debug("traversal_dangling_targets", node_id=node_id, targets=dangling)

    logger.debug(
        "traversal_complete",
        start_node_id=start_node_id,
        visited_count=len(visited),
        variable_count=len(accumulator),
    )
    return TraversalResult(
        properties=accumulator.properties,
        required=accumulator.required,
        first_node=first_node,
        visited=tuple(visited),
    )
