# ============================================================================
# CLAUDE CONTEXT - MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Model exports
# PURPOSE: Central export point for descriptors and application tables
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Descriptor models plus the application's compiled-in table definitions.

Single Source of Truth Pattern:
    - Table descriptors define structure and sync policy
    - SchemaRegistry holds them in generation order
    - SQL migration scripts are generated from the registry
"""

from core.models.descriptors import ColumnDescriptor, TableDescriptor
from core.models.projects import PROJECTS
from core.models.users import USERS_PUBLIC, USERS_PRIVATE
from core.models.app_state import APP_STATE, LOCAL_APP_STATE

# Generation order
APP_TABLES = (
    PROJECTS,
    USERS_PUBLIC,
    USERS_PRIVATE,
    APP_STATE,
    LOCAL_APP_STATE,
)

__all__ = [
    # Descriptors
    "ColumnDescriptor",
    "TableDescriptor",
    # Tables
    "PROJECTS",
    "USERS_PUBLIC",
    "USERS_PRIVATE",
    "APP_STATE",
    "LOCAL_APP_STATE",
    "APP_TABLES",
]
