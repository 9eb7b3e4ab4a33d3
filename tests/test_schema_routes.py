# ============================================================================
# SCHEMA ROUTES TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Schema inspection and script download endpoints
# PURPOSE: Verify api/schema_routes.py responses and service wiring
# CREATED: 17 OCT 2026
# ============================================================================
"""
Schema Routes Tests

Tests the schema HTTP endpoints (api/schema_routes.py) with FastAPI
TestClient against the application registry and a fixed clock.

Run with:
    pytest tests/test_schema_routes.py -v
"""

import logging
from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.schema_routes import router, set_schema_services
from core.config import GeneratorDefaults
from core.models import APP_TABLES
from core.schema.registry import SchemaRegistry
from core.schema.sql_generator import SchemaToSQL


# ============================================================================
# FIXTURES
# ============================================================================

def _make_test_app(generator):
    """Create a test FastAPI app with schema routes and an injected generator."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    set_schema_services(generator)
    return app


def _make_generator():
    return SchemaToSQL(
        SchemaRegistry(APP_TABLES),
        GeneratorDefaults(),
        clock=lambda: datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


@pytest.fixture
def client():
    app = _make_test_app(_make_generator())
    yield TestClient(app)
    set_schema_services(None)


# ============================================================================
# REGISTRY METADATA
# ============================================================================


class TestListTables:
    def test_lists_in_registry_order(self, client):
        resp = client.get("/api/v1/schema/tables")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == len(APP_TABLES)
        assert [t["table_name"] for t in data["tables"]] == [t.table_name for t in APP_TABLES]

    def test_policy_rules(self, client):
        data = client.get("/api/v1/schema/tables").json()
        rules = {t["table_name"]: t["policy_rule"] for t in data["tables"]}
        assert rules["projects"] == "owner_column"
        assert rules["users_public"] == "user_table"
        assert rules["local_app_state"] is None


class TestGetTable:
    def test_columns(self, client):
        resp = client.get("/api/v1/schema/tables/projects")
        assert resp.status_code == 200
        data = resp.json()
        assert data["primary_key"] == "id"
        assert data["is_relational"] is True

        columns = {c["name"]: c for c in data["columns"]}
        assert columns["id"]["sql_type"] == "UUID"
        assert columns["logo_url"]["encrypted"] is True
        assert columns["logo"]["is_relational"] is False
        assert columns["logo"]["sync_destinations"] == ["document", "local"]

    def test_local_only_table(self, client):
        data = client.get("/api/v1/schema/tables/local_app_state").json()
        assert data["is_relational"] is False
        assert data["policy_rule"] is None

    def test_unknown_table_404(self, client):
        resp = client.get("/api/v1/schema/tables/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Schema not found for table: nope"


# ============================================================================
# SQL SCRIPTS
# ============================================================================


class TestScripts:
    def test_complete(self, client):
        resp = client.get("/api/v1/schema/sql")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text.startswith("-- Complete Supabase Setup Script\n")

    def test_tables(self, client):
        resp = client.get("/api/v1/schema/sql/tables")
        assert resp.status_code == 200
        assert "CREATE TABLE IF NOT EXISTS projects" in resp.text
        assert "ROW LEVEL SECURITY" not in resp.text

    def test_single_table(self, client):
        resp = client.get("/api/v1/schema/sql/tables/users_public")
        assert resp.status_code == 200
        assert "DataSync schema: users_public" in resp.text
        assert "CREATE TABLE IF NOT EXISTS projects" not in resp.text

    def test_single_table_unknown_404(self, client):
        resp = client.get("/api/v1/schema/sql/tables/nope")
        assert resp.status_code == 404

    def test_foreign_keys(self, client):
        resp = client.get("/api/v1/schema/sql/foreign-keys")
        assert resp.status_code == 200
        assert resp.text.startswith("-- Foreign Key Relationships")

    def test_triggers(self, client):
        resp = client.get("/api/v1/schema/sql/triggers")
        assert resp.status_code == 200
        assert "CREATE TRIGGER set_projects_updated_at" in resp.text

    def test_rls(self, client):
        resp = client.get("/api/v1/schema/sql/rls")
        assert resp.status_code == 200
        assert "ALTER TABLE projects ENABLE ROW LEVEL SECURITY;" in resp.text
        assert "local_app_state" not in resp.text

    def test_matches_generator_output(self, client):
        resp = client.get("/api/v1/schema/sql/rls")
        assert resp.text == _make_generator().rls_sql()


# ============================================================================
# SERVICE WIRING
# ============================================================================


class TestNotInitialized:
    def test_503_without_generator(self):
        app = _make_test_app(None)
        client = TestClient(app)

        resp = client.get("/api/v1/schema/sql")
        assert resp.status_code == 503

        resp = client.get("/api/v1/schema/tables")
        assert resp.status_code == 503


# ============================================================================
# APPLICATION
# ============================================================================


class TestApplication:
    @pytest.fixture
    def app_client(self):
        # importing main configures the root logger
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        from main import app
        root.handlers[:] = handlers
        root.setLevel(level)

        with TestClient(app) as client:
            yield client
        set_schema_services(None)

    def test_health(self, app_client):
        resp = app_client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "tables": len(APP_TABLES)}

    def test_lifespan_wires_generator(self, app_client):
        resp = app_client.get("/api/v1/schema/sql/triggers")
        assert resp.status_code == 200
        assert "update_modified_column" in resp.text
