# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Identifiers and template text (placeholders mixed with noise)
- Process graphs (random topologies, cycles and dangling targets included)

Usage:
    from tests.property.conftest import process_documents, template_text

    @given(process=process_documents())
    def test_generation_terminates(process: dict) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, DETERMINISM_SETTINGS
#
# Tiers: DETERMINISM (500), STANDARD (100), QUICK (20)
# =============================================================================

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from flowschema.core.schema_types import KNOWN_TYPE_NAMES

# =============================================================================
# Identifiers and template text
# =============================================================================

identifiers = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,11}", fullmatch=True)

# "content.x" would name a variable, so the dotted head must not be "content"
_dotted_heads = identifiers.filter(lambda s: s != "content")

# Placeholder expressions that never name an input variable
discarded_expressions = st.one_of(
    st.builds(lambda a, b: f"{a}.{b}", _dotted_heads, identifiers),
    st.builds(lambda a: f"env_var[@{a}]", identifiers),
    st.builds(lambda a, i: f"{a}[{i}]", identifiers, st.integers(0, 9)),
    st.builds(lambda a, b: f"content.{a}.{b}", identifiers, identifiers),
)

# Text without braces, so it cannot open or close a placeholder
noise = st.text(alphabet=st.characters(blacklist_characters="{}"), max_size=12)

padding = st.sampled_from(["", " ", "  ", "\t"])


@st.composite
def template_text(draw: st.DrawFn) -> tuple[str, list[str]]:
    """Text with a mix of variable and non-variable placeholders.

    Returns:
        (text, expected variable names in order)
    """
    parts: list[str] = []
    expected: list[str] = []
    for _ in range(draw(st.integers(0, 6))):
        parts.append(draw(noise))
        kind = draw(st.sampled_from(["bare", "content", "discarded"]))
        left, right = draw(padding), draw(padding)
        if kind == "discarded":
            parts.append(f"{{{{{left}{draw(discarded_expressions)}{right}}}}}")
            continue
        name = draw(identifiers)
        expression = name if kind == "bare" else f"content.{name}"
        parts.append(f"{{{{{left}{expression}{right}}}}}")
        expected.append(name)
    parts.append(draw(noise))
    return "".join(parts), expected


type_names = st.one_of(st.sampled_from(sorted(KNOWN_TYPE_NAMES)), st.text(max_size=8))

# =============================================================================
# Process graphs
# =============================================================================

node_id_pool = [f"n{i}" for i in range(8)]


@st.composite
def transitions(draw: st.DrawFn) -> dict[str, Any]:
    """A transition to a pool node (or a dangling one) carrying variables."""
    target = draw(st.sampled_from([*node_id_pool, "dangling"]))
    kind = draw(st.sampled_from(["go", "go_if_const", "time", "api"]))
    transition: dict[str, Any] = {"type": kind, "to_node_id": target}
    if draw(st.booleans()):
        transition["body"] = {"value": "{{ " + draw(identifiers) + " }}"}
    if draw(st.booleans()):
        name = draw(identifiers)
        transition["extra"] = {name: "{{ " + name + " }}"}
        transition["extra_type"] = {name: draw(type_names)}
    if draw(st.booleans()):
        transition["url"] = "https://example.com/{{ " + draw(identifiers) + " }}"
    return transition


@st.composite
def process_documents(draw: st.DrawFn) -> dict[str, Any]:
    """Process export over a fixed id pool with random edges (cycles allowed)."""
    count = draw(st.integers(1, len(node_id_pool)))
    nodes = []
    for node_id in node_id_pool[:count]:
        logics = draw(st.lists(transitions(), max_size=3))
        nodes.append({"id": node_id, "title": node_id.upper(), "condition": {"logics": logics}})
    return {"scheme": {"nodes": nodes}}
