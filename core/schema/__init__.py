# ============================================================================
# CLAUDE CONTEXT - SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Schema registry and SQL generation
# PURPOSE: Generate Supabase migration scripts from table descriptors
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================

from core.schema.ddl_utils import (
    TableBuilder,
    IndexBuilder,
    ConstraintBuilder,
    TriggerBuilder,
    CommentBuilder,
    PolicyBuilder,
    SchemaUtils,
    TYPE_MAP,
    get_postgres_type,
)
from core.schema.registry import SchemaRegistry, get_registry, reset_registry
from core.schema.sql_generator import (
    SchemaToSQL,
    generate_complete_sql,
    generate_all_schemas_sql,
    generate_foreign_key_sql,
    generate_rls_policies_sql,
    generate_schema_sql,
)

__all__ = [
    # Registry
    "SchemaRegistry",
    "get_registry",
    "reset_registry",
    # Generator
    "SchemaToSQL",
    "generate_complete_sql",
    "generate_all_schemas_sql",
    "generate_foreign_key_sql",
    "generate_rls_policies_sql",
    "generate_schema_sql",
    # Utilities
    "TableBuilder",
    "IndexBuilder",
    "ConstraintBuilder",
    "TriggerBuilder",
    "CommentBuilder",
    "PolicyBuilder",
    "SchemaUtils",
    "TYPE_MAP",
    "get_postgres_type",
]
