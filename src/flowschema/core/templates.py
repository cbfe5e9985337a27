# src/flowschema/core/templates.py
"""Template variable extraction for process transition payloads.

Process exports reference caller-supplied values with ``{{ ... }}``
placeholders. Only two forms name an input variable the AI step has to
produce:

    {{ userId }}            -> userId
    {{ content.userId }}    -> userId   (task content prefix stripped)

Every other expression is discarded:

    {{ root.node_id }}      other nodes' outputs, resolved by the platform
    {{ env_var[@token] }}   environment lookups
    {{ a.b }} / {{ x[0] }}  dotted paths and subscripts

Usage:
    from flowschema.core.templates import extract_template_variables

    extract_template_variables("Bearer {{ token }} for {{ content.userId }}")
    # Returns: ["token", "userId"]

Limitations:
- Placeholders are matched lexically; ``{{`` inside a quoted string is still
  a placeholder
- Expressions containing ``}`` cannot be matched
"""

from __future__ import annotations

import re

from flowschema.contracts.types import VariableName

__all__ = [
    "CONTENT_PREFIX",
    "discarded_template_expressions",
    "extract_template_variables",
    "is_identifier",
]

CONTENT_PREFIX = "content."

_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^}]+?)\s*\}\}")
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_identifier(name: str) -> bool:
    """Check that name is an ASCII identifier ([A-Za-z_][A-Za-z0-9_]*)."""
    return _IDENTIFIER_PATTERN.fullmatch(name) is not None


def _normalize(expression: str) -> VariableName | None:
    """Map a trimmed placeholder expression to a variable name, or None."""
    if expression.startswith(CONTENT_PREFIX):
        candidate = expression[len(CONTENT_PREFIX) :].strip()
        if is_identifier(candidate):
            return VariableName(candidate)
        return None
    if is_identifier(expression):
        return VariableName(expression)
    return None


def extract_template_variables(text: str) -> list[VariableName]:
    """Extract input variable names from ``{{ ... }}`` placeholders.

    Args:
        text: Any string value from a transition payload

    Returns:
        Variable names in left-to-right order. Repeated placeholders yield
        repeated names. Empty list when nothing matches.

    Examples:
        >>> extract_template_variables("{{ a }} {{ content.b }} {{ c.d }}")
        ['a', 'b']

        >>> extract_template_variables("{{env_var[@secret]}}/{{root.id}}")
        []

        >>> extract_template_variables("no vars")
        []
    """
    names: list[VariableName] = []
    for match in _PLACEHOLDER_PATTERN.finditer(text):
        name = _normalize(match.group(1))
        if name is not None:
            names.append(name)
    return names


def discarded_template_expressions(text: str) -> list[str]:
    """Trimmed placeholder expressions that do not name an input variable.

    Examples:
        >>> discarded_template_expressions("{{ a }} {{ root.id }} {{ env_var[@k] }}")
        ['root.id', 'env_var[@k]']
    """
    return [match.group(1) for match in _PLACEHOLDER_PATTERN.finditer(text) if _normalize(match.group(1)) is None]
