# ============================================================================
# CLAUDE CONTEXT - SCHEMA ROUTES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Schema inspection and script download endpoints
# PURPOSE: HTTP API exposing the registry and the generated SQL scripts
# CREATED: 17 OCT 2026
# ============================================================================
"""
Schema Routes

Read-only endpoints. Nothing here touches a database; the scripts are
handed to an operator who runs them against the backend.

ENDPOINT SUMMARY:
-----------------
| Endpoint                        | Returns                         |
|---------------------------------|---------------------------------|
| GET /schema/tables              | Registry metadata (JSON)        |
| GET /schema/tables/{name}       | One table's metadata (JSON)     |
| GET /schema/sql                 | Complete script (text)          |
| GET /schema/sql/tables          | Tables + indexes script (text)  |
| GET /schema/sql/tables/{name}   | One table's script (text)       |
| GET /schema/sql/foreign-keys    | Foreign keys script (text)      |
| GET /schema/sql/triggers        | updated_at triggers (text)      |
| GET /schema/sql/rls             | RLS policies script (text)      |
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from api.schemas import TableListResponse, TableResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schema", tags=["Schema"])


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_generator = None


def set_schema_services(generator):
    """Called by main.py at startup to inject the SQL generator."""
    global _generator
    _generator = generator


def _get_generator():
    """Get the generator, raising 503 if not initialized."""
    if _generator is None:
        raise HTTPException(503, "Schema generator not initialized")
    return _generator


def _get_table(generator, table_name: str):
    table = generator.registry.schema_for(table_name)
    if table is None:
        raise HTTPException(404, f"Schema not found for table: {table_name}")
    return table


# ============================================================================
# REGISTRY METADATA
# ============================================================================

@router.get("/tables", response_model=TableListResponse)
async def list_tables():
    """List registered tables with their columns and selected RLS rule."""
    generator = _get_generator()

    tables = []
    for table in generator.registry:
        selection = generator.select_policy(table)
        tables.append(TableResponse.from_descriptor(
            table, selection.rule if selection else None
        ))

    return TableListResponse(tables=tables, count=len(tables))


@router.get("/tables/{table_name}", response_model=TableResponse)
async def get_table(table_name: str):
    """Get one table's metadata."""
    generator = _get_generator()
    table = _get_table(generator, table_name)
    selection = generator.select_policy(table)
    return TableResponse.from_descriptor(table, selection.rule if selection else None)


# ============================================================================
# SQL SCRIPTS
# ============================================================================

@router.get("/sql", response_class=PlainTextResponse)
async def get_complete_sql():
    """Complete setup script (tables, foreign keys, triggers, RLS)."""
    return PlainTextResponse(_get_generator().complete_sql())


@router.get("/sql/tables", response_class=PlainTextResponse)
async def get_tables_sql():
    """Tables and indexes transaction."""
    return PlainTextResponse(_get_generator().tables_sql())


@router.get("/sql/tables/{table_name}", response_class=PlainTextResponse)
async def get_table_sql(table_name: str):
    """Tables transaction restricted to one table."""
    generator = _get_generator()
    _get_table(generator, table_name)
    return PlainTextResponse(generator.schema_sql_for_table(table_name))


@router.get("/sql/foreign-keys", response_class=PlainTextResponse)
async def get_foreign_keys_sql():
    """Foreign keys transaction."""
    return PlainTextResponse(_get_generator().foreign_keys_sql())


@router.get("/sql/triggers", response_class=PlainTextResponse)
async def get_triggers_sql():
    """updated_at trigger function and triggers transaction."""
    return PlainTextResponse(_get_generator().triggers_sql())


@router.get("/sql/rls", response_class=PlainTextResponse)
async def get_rls_sql():
    """Row level security transaction."""
    return PlainTextResponse(_get_generator().rls_sql())
