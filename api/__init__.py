# ============================================================================
# API MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for schema inspection and SQL script download
# CREATED: 17 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for the schema compiler.
"""

from .schema_routes import router, set_schema_services
from .schemas import (
    ColumnResponse,
    TableResponse,
    TableListResponse,
)

__all__ = [
    "router",
    "set_schema_services",
    "ColumnResponse",
    "TableResponse",
    "TableListResponse",
]
