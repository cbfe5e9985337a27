# src/flowschema/core/__init__.py
"""Core infrastructure: Graph, Templates, Harvest, Traversal, Synthesis, Configuration, Logging."""

from flowschema.core.canonical import (
    CANONICAL_VERSION,
    canonical_json,
    stable_hash,
)
from flowschema.core.config import (
    FlowSchemaSettings,
    load_settings,
)
from flowschema.core.graph import (
    Node,
    ProcessGraph,
    Transition,
    parse_process,
)
from flowschema.core.harvest import (
    VariableAccumulator,
    harvest_transition,
)
from flowschema.core.logging import (
    configure_logging,
    get_logger,
)
from flowschema.core.schema_types import (
    merge_property_schema,
    schema_for_type,
)
from flowschema.core.synthesis import synthesize_schema
from flowschema.core.templates import extract_template_variables
from flowschema.core.traversal import (
    TraversalResult,
    collect_reachable,
)

__all__ = [
    "CANONICAL_VERSION",
    "FlowSchemaSettings",
    "Node",
    "ProcessGraph",
    "Transition",
    "TraversalResult",
    "VariableAccumulator",
    "canonical_json",
    "collect_reachable",
    "configure_logging",
    "extract_template_variables",
    "get_logger",
    "harvest_transition",
    "load_settings",
    "merge_property_schema",
    "parse_process",
    "schema_for_type",
    "stable_hash",
    "synthesize_schema",
]
