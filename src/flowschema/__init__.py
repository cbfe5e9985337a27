"""
flowschema: input-schema synthesis for workflow graphs.

Walks the nodes reachable after an AI step, harvests the template variables
their transitions consume, and describes them as a JSON Schema the AI step
can be asked to fill.
"""

__version__ = "0.1.0"
