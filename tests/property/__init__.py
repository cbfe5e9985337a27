# tests/property/__init__.py
"""Property-based tests for flowschema.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Schema generation runs on
arbitrary platform exports, so extraction, type merging, and traversal are
checked against generated templates and random process graphs.

Test categories:
- core/: Template extraction, type merging, traversal and generation
"""
