# src/flowschema/engine/orchestrator/__init__.py
"""Orchestrator package: one schema generation, end to end.

Module structure:
- core.py: Orchestrator class and run_generation() wrapper
- types.py: GenerationMeta, GenerationResult
"""

from flowschema.engine.orchestrator.core import Orchestrator, run_generation
from flowschema.engine.orchestrator.types import GenerationMeta, GenerationResult

__all__ = [
    "GenerationMeta",
    "GenerationResult",
    "Orchestrator",
    "run_generation",
]
