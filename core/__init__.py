# ============================================================================
# CLAUDE CONTEXT - CORE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core module initialization
# PURPOSE: Export contracts, descriptors, registry and SQL generator
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================

from core.contracts import SyncDestination, ContainerVisibility, AbstractType
from core.models import ColumnDescriptor, TableDescriptor, APP_TABLES
from core.schema import SchemaRegistry, SchemaToSQL, get_registry

__all__ = [
    # Enums
    "SyncDestination",
    "ContainerVisibility",
    "AbstractType",
    # Models
    "ColumnDescriptor",
    "TableDescriptor",
    "APP_TABLES",
    # Schema
    "SchemaRegistry",
    "SchemaToSQL",
    "get_registry",
]
