# ============================================================================
# DDL UTILITY TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Type mapping and statement builders
# PURPOSE: Verify rendered text of every builder
# CREATED: 17 OCT 2026
# ============================================================================
"""
DDL Utility Tests

Builders are rendered without a connection and compared as text.

Run with:
    pytest tests/test_ddl_utils.py -v
"""

import pytest

from core.contracts import AbstractType
from core.schema.ddl_utils import (
    CommentBuilder,
    ConstraintBuilder,
    IndexBuilder,
    PolicyBuilder,
    SchemaUtils,
    TableBuilder,
    TriggerBuilder,
    get_postgres_type,
    render,
)


# ============================================================================
# TYPE MAPPING
# ============================================================================


class TestTypeMapping:
    @pytest.mark.parametrize("abstract_type, expected", [
        ("text", "TEXT"),
        ("integer", "INTEGER"),
        ("float", "DOUBLE PRECISION"),
        ("boolean", "BOOLEAN"),
        ("timestamp", "TIMESTAMP WITH TIME ZONE"),
        ("uuid", "UUID"),
        ("binary", "BYTEA"),
    ])
    def test_known_types(self, abstract_type, expected):
        assert get_postgres_type(abstract_type) == expected

    def test_enum_members(self):
        assert get_postgres_type(AbstractType.UUID) == "UUID"
        assert get_postgres_type(AbstractType.BINARY) == "BYTEA"

    def test_aliases_case_insensitive(self):
        assert get_postgres_type("String") == "TEXT"
        assert get_postgres_type("Int") == "INTEGER"
        assert get_postgres_type("Double") == "DOUBLE PRECISION"
        assert get_postgres_type("Date") == "TIMESTAMP WITH TIME ZONE"
        assert get_postgres_type("Data") == "BYTEA"

    @pytest.mark.parametrize("abstract_type", ["image", "Date?", "geometry", ""])
    def test_unknown_falls_back_to_text(self, abstract_type):
        assert get_postgres_type(abstract_type) == "TEXT"


# ============================================================================
# TABLE BUILDER
# ============================================================================


class TestTableBuilder:
    def test_column_modifier_order(self):
        line = TableBuilder.column("id", "UUID", not_null=True, unique=True, primary_key=True)
        assert render(line) == "    id UUID NOT NULL UNIQUE PRIMARY KEY"

    def test_plain_column(self):
        assert render(TableBuilder.column("name", "TEXT")) == "    name TEXT"

    def test_create(self):
        stmt = TableBuilder.create("widgets", [
            TableBuilder.column("id", "UUID", not_null=True, primary_key=True),
            TableBuilder.column("name", "TEXT"),
        ])
        assert render(stmt) == (
            "CREATE TABLE IF NOT EXISTS widgets (\n"
            "    id UUID NOT NULL PRIMARY KEY,\n"
            "    name TEXT\n"
            ")"
        )


# ============================================================================
# INDEX / CONSTRAINT / COMMENT BUILDERS
# ============================================================================


class TestIndexBuilder:
    def test_conventional_name(self):
        stmt = IndexBuilder.btree("projects", "owner_id")
        assert render(stmt) == (
            "CREATE INDEX IF NOT EXISTS idx_projects_owner_id ON projects(owner_id)"
        )

    def test_custom_name(self):
        stmt = IndexBuilder.btree("projects", "owner_id", name="projects_by_owner")
        assert render(stmt).startswith("CREATE INDEX IF NOT EXISTS projects_by_owner ON")


class TestConstraintBuilder:
    def test_foreign_key(self):
        stmt = ConstraintBuilder.foreign_key("tasks", "project_id", "projects", "id")
        assert render(stmt) == (
            "ALTER TABLE tasks ADD CONSTRAINT fk_tasks_project_id\n"
            "    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE"
        )


class TestCommentBuilder:
    def test_column_comment(self):
        stmt = CommentBuilder.column("users_private", "email", "This field is encrypted on the client")
        assert render(stmt) == (
            "COMMENT ON COLUMN users_private.email IS 'This field is encrypted on the client'"
        )

    def test_quote_escaped(self):
        stmt = CommentBuilder.column("widgets", "id", "it's encrypted")
        assert render(stmt) == "COMMENT ON COLUMN widgets.id IS 'it''s encrypted'"

    def test_backslash_escape_string_single_space(self):
        stmt = CommentBuilder.column("widgets", "id", r"it's \ enc")
        assert render(stmt) == r"COMMENT ON COLUMN widgets.id IS E'it''s \\ enc'"


# ============================================================================
# TRIGGER BUILDER
# ============================================================================


class TestTriggerBuilder:
    def test_function(self):
        text = render(TriggerBuilder.updated_at_function())
        assert text.startswith("CREATE OR REPLACE FUNCTION update_modified_column()\nRETURNS TRIGGER AS $$")
        assert "NEW.updated_at = now();" in text
        assert text.endswith("$$ language 'plpgsql'")

    def test_custom_function_name(self):
        text = render(TriggerBuilder.updated_at_function("touch_updated_at"))
        assert "FUNCTION touch_updated_at()" in text

    def test_trigger_is_drop_then_create(self):
        drop_stmt, create_stmt = TriggerBuilder.updated_at_trigger("projects")
        assert render(drop_stmt) == "DROP TRIGGER IF EXISTS set_projects_updated_at ON projects"
        assert render(create_stmt) == (
            "CREATE TRIGGER set_projects_updated_at\n"
            "BEFORE UPDATE ON projects\n"
            "FOR EACH ROW\n"
            "EXECUTE FUNCTION update_modified_column()"
        )


# ============================================================================
# POLICY BUILDER
# ============================================================================


class TestPolicyBuilder:
    def test_enable_rls(self):
        assert render(PolicyBuilder.enable_rls("projects")) == (
            "ALTER TABLE projects ENABLE ROW LEVEL SECURITY"
        )

    def test_select_uses_using(self):
        stmt = PolicyBuilder.policy("widgets", "SELECT", PolicyBuilder.ownership_check("owner_id"))
        assert render(stmt) == (
            'CREATE POLICY "widgets_auth_select" ON widgets FOR SELECT\n'
            "    USING (auth.uid()::text = owner_id::text)"
        )

    def test_insert_uses_with_check(self):
        stmt = PolicyBuilder.policy("widgets", "INSERT", PolicyBuilder.role_check("authenticated"))
        assert render(stmt) == (
            'CREATE POLICY "widgets_auth_insert" ON widgets FOR INSERT\n'
            "    WITH CHECK (auth.role() = 'authenticated')"
        )

    def test_policy_set_order(self):
        stmts = PolicyBuilder.policy_set("widgets", PolicyBuilder.ownership_check("id"))
        commands = [render(s).split("\n")[0].rsplit(" ", 1)[-1] for s in stmts]
        assert commands == ["SELECT", "INSERT", "UPDATE", "DELETE"]


class TestSchemaUtils:
    def test_transaction_delimiters(self):
        assert render(SchemaUtils.begin()) == "BEGIN"
        assert render(SchemaUtils.commit()) == "COMMIT"
