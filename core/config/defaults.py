# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for SQL generation and logging
# CREATED: 17 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the SQL generators and logging.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GeneratorDefaults:
    """
    Defaults for SQL generation.

    Controls script labels, encrypted-column comments, the updated_at
    trigger function and the role used by fallback RLS policies.
    """
    # Script headers
    schema_label: str = "AllSchemas"
    backend_label: str = "Supabase"

    # COMMENT ON COLUMN text for client-side encrypted fields
    encrypted_comment: str = "This field is encrypted on the client"

    # Shared trigger function touching updated_at
    trigger_function: str = "update_modified_column"

    # Role required by the fallback (no ownership column) policies
    authenticated_role: str = "authenticated"

    @classmethod
    def from_env(cls) -> "GeneratorDefaults":
        """Create from environment variables."""
        return cls(
            schema_label=os.getenv("DATASYNC_SCHEMA_LABEL", "AllSchemas"),
            backend_label=os.getenv("DATASYNC_BACKEND_LABEL", "Supabase"),
            encrypted_comment=os.getenv(
                "DATASYNC_ENCRYPTED_COMMENT", "This field is encrypted on the client"
            ),
            trigger_function=os.getenv("DATASYNC_TRIGGER_FUNCTION", "update_modified_column"),
            authenticated_role=os.getenv("DATASYNC_AUTHENTICATED_ROLE", "authenticated"),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """Defaults for log output."""
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            json_output=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


@dataclass
class Defaults:
    """Container for all default configurations."""
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            generator=GeneratorDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "GeneratorDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
