# src/flowschema/core/config.py
"""
Configuration schema and loading for flowschema.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from flowschema.contracts.enums import OutputField
from flowschema.core.synthesis import DEFAULT_SCHEMA_DIALECT, DEFAULT_SCHEMA_NAME

ENVVAR_PREFIX = "FLOWSCHEMA"


class FlowSchemaSettings(BaseModel):
    """Top-level flowschema configuration.

    Every field has a default, so an empty settings file (or none at all)
    reproduces the callback's standard behaviour.
    """

    model_config = {"frozen": True}

    include_url_vars: bool = Field(
        default=False,
        description="Harvest variables from transition url fields when the payload omits includeUrlVars",
    )
    output_field: OutputField = Field(
        default=OutputField.STRUCTURED_OUTPUT_RSP,
        description="Payload location of the generated schema: structured_output_rsp.schema or schema",
    )
    schema_name: str = Field(
        default=DEFAULT_SCHEMA_NAME,
        min_length=1,
        description="Value of the generated schema's name member",
    )
    schema_dialect: str = Field(
        default=DEFAULT_SCHEMA_DIALECT,
        description="Value of the generated schema's $schema member",
    )
    unwrap_content_properties: bool = Field(
        default=False,
        description="Replace payload.content with payload.content.properties when present",
    )
    debug_meta: bool = Field(
        default=False,
        description="Add reachable_node_ids to the meta object",
    )

    @field_validator("schema_dialect")
    @classmethod
    def validate_schema_dialect(cls, v: str) -> str:
        """$schema must be an absolute http(s) URI."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"schema_dialect must be an http(s) URI, got {v!r}")
        return v


def load_settings(config_path: Path | None = None) -> FlowSchemaSettings:
    """Load settings from a file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (FLOWSCHEMA_*) - highest priority
    2. Config file (YAML, TOML, or JSON) when given
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to the settings file, or None for env/defaults only

    Returns:
        Validated FlowSchemaSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # The CLI loads .env itself
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return FlowSchemaSettings(**raw_config)
