# src/flowschema/core/graph/models.py
"""Node and transition types for process graphs.

Leaf module - no intra-package imports beyond contracts (prevents import cycles).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from flowschema.contracts.enums import TransitionKind
from flowschema.contracts.types import NodeID

# Transition payloads vary by kind:
# - go / go_if_*: {type, to_node_id, conditions?}
# - api: {type, url, method, extra, extra_type, extra_headers, response, ...}
# - time / semaphore: {type, to_node_id, value, unit, ...}
# The set of kinds is open-ended, so the graph layer keeps the decoded JSON
# object as-is. Only harvest.py looks inside it.
TransitionPayload: TypeAlias = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Transition:
    """One outgoing transition ("logic" or "semaphor") of a node.

    Attributes:
        kind: Free-form transition type ("go", "go_if_true", "time", "api", ...)
        to_node_id: Target node, None when the transition has no target
        raw: Full decoded transition object, used for variable harvesting.
            Treated as read-only.
    """

    kind: str
    to_node_id: NodeID | None = None
    raw: TransitionPayload = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_raw(cls, raw: TransitionPayload) -> Transition:
        """Build a transition from its decoded JSON object.

        Non-string ``type`` and ``to_node_id`` values are treated as absent.
        """
        kind = raw.get("type")
        target = raw.get("to_node_id")
        return cls(
            kind=kind if isinstance(kind, str) else "",
            to_node_id=NodeID(target) if isinstance(target, str) and target else None,
            raw=raw,
        )

    @property
    def is_unconditional(self) -> bool:
        return self.kind == TransitionKind.GO


@dataclass(frozen=True, slots=True)
class Node:
    """A process node and its outgoing transitions.

    ``transitions`` holds the node's logics (direct or from its condition
    wrapper) followed by its semaphors. An empty tuple marks a terminal node.
    """

    node_id: NodeID
    title: str = ""
    obj_type: int | None = None
    transitions: tuple[Transition, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return not self.transitions

    def targets(self) -> list[NodeID]:
        """Target ids of all transitions that have one, in declaration order."""
        return [t.to_node_id for t in self.transitions if t.to_node_id is not None]
