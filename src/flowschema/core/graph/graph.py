# src/flowschema/core/graph/graph.py
"""ProcessGraph class - query and traversal-order operations.

Construction logic lives in builder.py; this module contains the graph
class with its read-only methods. The from_process() classmethod is a thin
facade that delegates to builder.parse_process().
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

import networkx as nx
from networkx import MultiDiGraph

from flowschema.contracts.types import NodeID
from flowschema.core.graph.models import Node


class ProcessGraph:
    """Indexed, read-only view of a process export.

    Wraps a NetworkX MultiDiGraph so that several transitions between the same
    pair of nodes (e.g. a "go" and a timer to the same target) stay distinct
    edges. Only edges whose target exists in the node set are added; dangling
    targets remain visible on the Node itself via dangling_targets().
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._graph: MultiDiGraph[str] = nx.MultiDiGraph()
        self._nodes: dict[NodeID, Node] = {}

        for node in nodes:
            self._nodes[node.node_id] = node
            self._graph.add_node(node.node_id, info=node)

        for node in self._nodes.values():
            for position, transition in enumerate(node.transitions):
                target = transition.to_node_id
                if target is not None and target in self._nodes:
                    # Position as key keeps parallel transitions apart
                    self._graph.add_edge(node.node_id, target, key=position, kind=transition.kind)

    @classmethod
    def from_process(cls, process: Any) -> ProcessGraph:
        """Parse a process export into a graph.

        See builder.parse_process() for accepted shapes and raised errors.
        """
        from flowschema.core.graph.builder import parse_process

        return parse_process(process)

    @property
    def node_count(self) -> int:
        """Number of nodes in the graph."""
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Number of resolvable edges (dangling transitions excluded)."""
        return self._graph.number_of_edges()

    def has_node(self, node_id: str) -> bool:
        """Check if node exists."""
        return node_id in self._nodes

    def by_id(self, node_id: str) -> Node | None:
        """Return the node with this id, or None."""
        return self._nodes.get(NodeID(node_id))

    def nodes(self) -> Iterator[Node]:
        """Iterate nodes in document order."""
        return iter(self._nodes.values())

    def first_go_target(self, node_id: str) -> NodeID | None:
        """Target of the node's first unconditional ("go") transition.

        Logics are considered before semaphors. Returns None when the node
        is unknown or has no "go" transition with a target. The returned id
        may be dangling.
        """
        node = self.by_id(node_id)
        if node is None:
            return None
        for transition in node.transitions:
            if transition.is_unconditional and transition.to_node_id is not None:
                return transition.to_node_id
        return None

    def dangling_targets(self, node_id: str) -> list[NodeID]:
        """Transition targets of a node that are not in the graph."""
        node = self.by_id(node_id)
        if node is None:
            return []
        return [target for target in node.targets() if target not in self._nodes]

    def bfs_order(self, start_node_id: str) -> list[NodeID]:
        """Node ids reachable from start_node_id, breadth-first.

        Every transition kind counts as an edge. Each node appears once, so
        cycles terminate. Returns an empty list when the start node is not
        in the graph.
        """
        if start_node_id not in self._nodes:
            return []
        order = [NodeID(start_node_id)]
        order.extend(NodeID(target) for _, target in nx.bfs_edges(self._graph, start_node_id))
        return order
