# ============================================================================
# DATASYNC SCHEMA COMPILER - MAIN APPLICATION
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - FastAPI application entry point
# PURPOSE: Serve registry metadata and generated SQL scripts
# CREATED: 17 OCT 2026
# ============================================================================
"""
DataSync Schema Compiler Main Application

FastAPI application that exposes the schema registry and the generated
Supabase migration scripts for operators.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE, EPOCH
from api.schema_routes import router as schema_router, set_schema_services
from core.config import get_defaults
from core.logging import ComponentType, configure_logging, get_logger
from core.schema import SchemaToSQL, get_registry

_log_defaults = get_defaults().logging
configure_logging(
    level=_log_defaults.level,
    json_output=_log_defaults.json_output,
)
logger = get_logger(__name__, ComponentType.API)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds the registry and generator once on startup.
    """
    logger.info(f"Starting DataSync schema compiler v{__version__} (Epoch {EPOCH}, Build {BUILD_DATE})")

    registry = get_registry()
    set_schema_services(SchemaToSQL(registry, get_defaults().generator))
    logger.info(f"Schema registry loaded ({len(registry)} tables)")

    yield

    set_schema_services(None)
    logger.info("DataSync schema compiler stopped")


app = FastAPI(
    title="DataSync Schema Compiler",
    description="Supabase migration scripts generated from DataSync table descriptors",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(schema_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "DataSync Schema Compiler",
        "version": __version__,
        "epoch": EPOCH,
        "build_date": BUILD_DATE,
        "status": "running",
    }


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok", "tables": len(get_registry())}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )
