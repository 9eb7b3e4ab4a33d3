# ============================================================================
# API SCHEMAS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models describing registry metadata over HTTP
# CREATED: 17 OCT 2026
# ============================================================================
"""
API Schemas

Response models for the schema API. SQL endpoints return plain text and
have no model.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from core.models.descriptors import ColumnDescriptor, TableDescriptor
from core.schema.ddl_utils import get_postgres_type


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ColumnResponse(BaseModel):
    """Column metadata."""
    name: str
    abstract_type: str
    sql_type: str = Field(..., description="Mapped PostgreSQL type")
    encrypted: bool
    is_unique: bool
    is_relational: bool
    sync_destinations: List[str]
    containers: Optional[List[str]] = None
    relational_column_name: Optional[str] = None

    @classmethod
    def from_descriptor(cls, column: ColumnDescriptor) -> "ColumnResponse":
        return cls(
            name=column.name,
            abstract_type=column.abstract_type,
            sql_type=get_postgres_type(column.abstract_type),
            encrypted=column.encrypted,
            is_unique=column.is_unique,
            is_relational=column.is_relational,
            sync_destinations=sorted(d.value for d in column.sync_destinations),
            containers=(
                sorted(c.value for c in column.containers)
                if column.containers is not None else None
            ),
            relational_column_name=column.relational_column_name,
        )


class TableResponse(BaseModel):
    """Table metadata."""
    table_name: str
    primary_key: Optional[str] = None
    is_relational: bool = Field(..., description="Whether the table reaches the backend")
    policy_rule: Optional[str] = Field(
        None, description="Selected RLS rule (None for tables without backend columns)"
    )
    columns: List[ColumnResponse]

    @classmethod
    def from_descriptor(
        cls,
        table: TableDescriptor,
        policy_rule: Optional[str] = None,
    ) -> "TableResponse":
        return cls(
            table_name=table.table_name,
            primary_key=table.primary_key,
            is_relational=table.is_relational,
            policy_rule=policy_rule,
            columns=[ColumnResponse.from_descriptor(c) for c in table.columns],
        )


class TableListResponse(BaseModel):
    """Registered tables in generation order."""
    tables: List[TableResponse]
    count: int
