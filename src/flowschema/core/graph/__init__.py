# src/flowschema/core/graph/__init__.py
"""Process graph package: node model, construction, and query operations.

Module structure:
- models.py: Node, Transition (leaf)
- graph.py: ProcessGraph (index + NetworkX edges, BFS order)
- builder.py: parse_process() for platform exports
"""

from flowschema.core.graph.builder import parse_process
from flowschema.core.graph.graph import ProcessGraph
from flowschema.core.graph.models import Node, Transition, TransitionPayload

__all__ = [
    "Node",
    "ProcessGraph",
    "Transition",
    "TransitionPayload",
    "parse_process",
]
