# src/flowschema/engine/orchestrator/types.py
"""Generation result types.

These types define the interface between the orchestrator and the callback
harness:
- GenerationMeta: Metadata describing what was harvested
- GenerationResult: Meta + schema on success, ErrorInfo on failure

This module is a LEAF MODULE - it must NOT import from orchestrator/core.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flowschema.contracts.errors import ErrorInfo
from flowschema.contracts.types import NodeID, VariableName


@dataclass(frozen=True, slots=True)
class GenerationMeta:
    """Metadata written to the payload's ``meta`` object.

    Attributes:
        ai_node_id: The AI node the schema was generated for
        next_node_id: Node reached by the AI node's first "go" transition
        next_node_title: Title of that node
        vars: Sorted variable names (same as schema.required)
        include_url_vars: Whether url fields were harvested
        reachable_node_ids: Visited nodes in BFS order (debug only)
    """

    ai_node_id: str
    next_node_id: NodeID | None = None
    next_node_title: str | None = None
    vars: tuple[VariableName, ...] = ()
    include_url_vars: bool = False
    reachable_node_ids: tuple[NodeID, ...] | None = None

    @property
    def vars_count(self) -> int:
        return len(self.vars)

    def to_dict(self) -> dict[str, Any]:
        """Wire form. Unresolved or empty next-node fields and debug fields are omitted."""
        result: dict[str, Any] = {"ai_node_id": self.ai_node_id}
        if self.next_node_id is not None:
            result["next_node_id"] = self.next_node_id
        if self.next_node_title:
            result["next_node_title"] = self.next_node_title
        result["vars"] = list(self.vars)
        result["vars_count"] = self.vars_count
        result["include_url_vars"] = self.include_url_vars
        if self.reachable_node_ids is not None:
            result["reachable_node_ids"] = list(self.reachable_node_ids)
        return result


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one schema generation.

    Exactly one of (meta + schema) or error is populated.
    """

    meta: GenerationMeta | None = None
    schema: dict[str, Any] = field(default_factory=dict)
    error: ErrorInfo | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: ErrorInfo) -> GenerationResult:
        return cls(error=error)
