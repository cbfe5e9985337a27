# src/flowschema/core/harvest.py
"""Field-aware variable harvesting from transition payloads.

A transition payload is an arbitrary decoded JSON object. Some fields carry
type information or are outputs rather than inputs, so they are read with
dedicated rules before the generic recursive scan:

    url              string variables (only when URL variables are included)
    extra_headers    string variables from each header value
    extra            variables typed by the sibling extra_type mapping
    response,
    response_type    outputs of the call, never scanned
    everything else  string variables, scanned recursively

The generic scan skips the typed/output keys at every depth so it cannot
downgrade a type recorded by the extra/extra_type rule.
"""

from __future__ import annotations

from typing import Any, Final

import structlog

from flowschema.contracts.types import PropertySchema, VariableName
from flowschema.core.schema_types import DEFAULT_TYPE_NAME, KNOWN_TYPE_NAMES, merge_property_schema, schema_for_type
from flowschema.core.templates import discarded_template_expressions, extract_template_variables

logger = structlog.get_logger(__name__)

URL_FIELD: Final = "url"
EXTRA_FIELD: Final = "extra"
EXTRA_TYPE_FIELD: Final = "extra_type"
EXTRA_HEADERS_FIELD: Final = "extra_headers"

SCAN_SKIPPED_FIELDS: Final = frozenset(
    {
        "response",
        "response_type",
        EXTRA_FIELD,
        EXTRA_TYPE_FIELD,
        EXTRA_HEADERS_FIELD,
    }
)


class VariableAccumulator:
    """Collects harvested variables for one traversal run.

    Each name maps to exactly one schema fragment; repeated sightings are
    reconciled with merge_property_schema(). Not shared across runs.
    """

    def __init__(self) -> None:
        self._properties: dict[VariableName, PropertySchema] = {}

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, name: object) -> bool:
        return name in self._properties

    def add(self, name: VariableName, fragment: PropertySchema) -> None:
        """Record a sighting of name with an inferred fragment."""
        if not name:
            return
        self._properties[name] = merge_property_schema(self._properties.get(name), fragment)

    def add_from_text(self, text: str, type_name: str | None = None) -> None:
        """Record every variable referenced by text with the given type.

        Placeholders that do not name an input variable, such as node
        outputs, are logged at debug level.
        """
        for name in extract_template_variables(text):
            self.add(name, schema_for_type(type_name))

        skipped = discarded_template_expressions(text)
        if skipped:
            logger.debug("template_expressions_skipped", expressions=skipped)

    @property
    def properties(self) -> dict[VariableName, PropertySchema]:
        return dict(self._properties)

    @property
    def required(self) -> list[VariableName]:
        """Sorted names of every recorded variable."""
        return sorted(self._properties)


def harvest_transition(
    raw: dict[str, Any],
    accumulator: VariableAccumulator,
    *,
    include_url_vars: bool = False,
) -> None:
    """Harvest input variables from one transition payload.

    Args:
        raw: Decoded transition object
        accumulator: Receives the variables found
        include_url_vars: Harvest the top-level ``url`` field. When False the
            field is skipped entirely, including by the generic scan.
    """
    url = raw.get(URL_FIELD)
    if include_url_vars and isinstance(url, str):
        accumulator.add_from_text(url)

    headers = raw.get(EXTRA_HEADERS_FIELD)
    if isinstance(headers, dict):
        for value in headers.values():
            if isinstance(value, str):
                accumulator.add_from_text(value)

    extra = raw.get(EXTRA_FIELD)
    extra_types = raw.get(EXTRA_TYPE_FIELD)
    if isinstance(extra, dict):
        for key, value in extra.items():
            if isinstance(value, str):
                accumulator.add_from_text(value, _declared_type(extra_types, key))

    for key, value in raw.items():
        if key in SCAN_SKIPPED_FIELDS:
            continue
        if key == URL_FIELD and not include_url_vars:
            continue
        _scan(value, accumulator)


def _declared_type(extra_types: Any, key: str) -> str | None:
    """Lower-cased extra_type entry for key, or None when not declared."""
    if not isinstance(extra_types, dict):
        return None
    declared = extra_types.get(key)
    if not isinstance(declared, str):
        return None
    type_name = declared.strip().lower()
    if type_name not in KNOWN_TYPE_NAMES:
        logger.debug("extra_type_unknown", key=key, declared=declared, fallback=DEFAULT_TYPE_NAME)
    return type_name


def _scan(value: Any, accumulator: VariableAccumulator) -> None:
    """Recursively harvest string values as string-typed variables."""
    match value:
        case str():
            accumulator.add_from_text(value)
        case dict():
            for key, child in value.items():
                if key in SCAN_SKIPPED_FIELDS:
                    continue
                _scan(child, accumulator)
        case list():
            for child in value:
                _scan(child, accumulator)
        case bool() | int() | float() | None:
            pass
        case _:
            raise TypeError(f"Transition payload contains a non-JSON value of type {type(value).__name__}")

