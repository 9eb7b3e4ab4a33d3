# ============================================================================
# SCHEMA DESCRIPTOR & REGISTRY TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Vocabulary enums, descriptors, registry lookups
# PURPOSE: Verify descriptor validation and registry query semantics
# CREATED: 17 OCT 2026
# ============================================================================
"""
Schema Descriptor Tests

Unit tests for the schema metadata model:
- Enums: SyncDestination, ContainerVisibility, AbstractType
- Models: ColumnDescriptor, TableDescriptor (validation + helpers)
- SchemaRegistry lookups, duplicate handling, default registry

Run with:
    pytest tests/test_descriptors.py -v
"""

import logging

import pytest
from pydantic import ValidationError

from core.contracts import AbstractType, ContainerVisibility, SyncDestination
from core.models import APP_TABLES, PROJECTS, USERS_PRIVATE, LOCAL_APP_STATE
from core.models.descriptors import ColumnDescriptor, TableDescriptor
from core.schema.registry import SchemaRegistry, get_registry, reset_registry


# ============================================================================
# HELPERS
# ============================================================================

def _column(name, abstract_type="text", relational=True, **kwargs):
    destinations = SyncDestination.everything() if relational else {SyncDestination.LOCAL}
    return ColumnDescriptor(
        name=name,
        abstract_type=abstract_type,
        sync_destinations=destinations,
        **kwargs,
    )


def _table(name, columns, primary_key=None):
    return TableDescriptor(table_name=name, columns=columns, primary_key=primary_key)


# ============================================================================
# ENUM TESTS
# ============================================================================


class TestSyncDestination:
    def test_values(self):
        assert SyncDestination.LOCAL.value == "local"
        assert SyncDestination.DOCUMENT.value == "document"
        assert SyncDestination.RELATIONAL.value == "relational"

    def test_everything_contains_relational(self):
        assert SyncDestination.RELATIONAL in SyncDestination.everything()
        assert len(SyncDestination.everything()) == 3

    def test_local_and_document_excludes_relational(self):
        assert SyncDestination.RELATIONAL not in SyncDestination.local_and_document()


class TestContainerVisibility:
    def test_combinations(self):
        assert ContainerVisibility.public_and_private() == {
            ContainerVisibility.PUBLIC, ContainerVisibility.PRIVATE,
        }
        assert ContainerVisibility.shared_and_private() == {
            ContainerVisibility.SHARED, ContainerVisibility.PRIVATE,
        }


# ============================================================================
# COLUMN DESCRIPTOR TESTS
# ============================================================================


class TestColumnDescriptor:
    def test_defaults(self):
        col = _column("username")
        assert col.encrypted is False
        assert col.is_unique is False
        assert col.containers is None
        assert col.relational_column_name is None

    def test_abstract_type_enum_unwrapped(self):
        col = _column("id", abstract_type=AbstractType.UUID)
        assert col.abstract_type == "uuid"

    def test_unknown_abstract_type_allowed(self):
        col = _column("logo", abstract_type="image")
        assert col.abstract_type == "image"

    def test_list_of_destinations_coerced(self):
        col = ColumnDescriptor(
            name="x", abstract_type="text",
            sync_destinations=["local", "relational"],
        )
        assert col.sync_destinations == frozenset({SyncDestination.LOCAL, SyncDestination.RELATIONAL})

    def test_is_relational(self):
        assert _column("a").is_relational
        assert not _column("b", relational=False).is_relational
        assert _column("a").syncs_to(SyncDestination.DOCUMENT)

    def test_empty_destinations_rejected(self):
        with pytest.raises(ValidationError):
            ColumnDescriptor(name="x", abstract_type="text", sync_destinations=[])

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            _column("")

    def test_frozen(self):
        col = _column("x")
        with pytest.raises(ValidationError):
            col.name = "y"


# ============================================================================
# TABLE DESCRIPTOR TESTS
# ============================================================================


class TestTableDescriptor:
    def test_primary_key_must_exist(self):
        with pytest.raises(ValidationError, match="Primary key 'missing'"):
            _table("widgets", [_column("id")], primary_key="missing")

    def test_local_primary_key_with_relational_columns_rejected(self):
        with pytest.raises(ValidationError, match="Primary key 'id' of 'user_notes' is not synced"):
            _table("user_notes", [
                _column("id", relational=False),
                _column("body"),
            ], primary_key="id")

    def test_local_primary_key_on_local_only_table(self):
        table = _table("drafts", [
            _column("id", relational=False),
            _column("body", relational=False),
        ], primary_key="id")
        assert not table.is_relational

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate column 'id'"):
            _table("widgets", [_column("id"), _column("id")])

    def test_empty_columns_rejected(self):
        with pytest.raises(ValidationError):
            _table("widgets", [])

    def test_primary_key_optional(self):
        table = _table("widgets", [_column("name")])
        assert table.primary_key is None

    def test_relational_columns_keep_order(self):
        table = _table("widgets", [
            _column("id"),
            _column("cache", relational=False),
            _column("name"),
        ], primary_key="id")
        assert [c.name for c in table.relational_columns()] == ["id", "name"]
        assert table.is_relational

    def test_local_only_table(self):
        assert not LOCAL_APP_STATE.is_relational
        assert LOCAL_APP_STATE.relational_columns() == []

    def test_column_lookup(self):
        assert PROJECTS.column("logo_url").encrypted is True
        assert PROJECTS.column("nope") is None
        assert PROJECTS.has_column("owner_id")


# ============================================================================
# REGISTRY TESTS
# ============================================================================


class TestSchemaRegistry:
    def test_order_preserved(self):
        registry = SchemaRegistry(APP_TABLES)
        assert registry.table_names == (
            "projects", "users_public", "users_private", "app_state", "local_app_state",
        )
        assert len(registry) == 5

    def test_schema_for(self):
        registry = SchemaRegistry(APP_TABLES)
        assert registry.schema_for("users_private") is USERS_PRIVATE
        assert registry.schema_for("missing") is None
        assert "projects" in registry
        assert "missing" not in registry

    def test_column_queries(self):
        registry = SchemaRegistry(APP_TABLES)
        assert registry.is_encrypted("users_private", "email") is True
        assert registry.is_unique("users_private", "user_id") is True
        assert registry.primary_key("users_private") == "user_id"
        assert registry.containers("projects", "project_name") == {ContainerVisibility.PRIVATE}
        assert SyncDestination.RELATIONAL not in registry.sync_destinations(
            "users_private", "phone_number"
        )

    def test_unknown_lookups_return_none(self):
        registry = SchemaRegistry(APP_TABLES)
        assert registry.is_encrypted("missing", "email") is None
        assert registry.is_encrypted("users_private", "missing") is None
        assert registry.sync_destinations("missing", "x") is None
        assert registry.primary_key("missing") is None

    def test_duplicate_names_first_match_wins(self, caplog):
        first = _table("widgets", [_column("id")], primary_key="id")
        second = _table("widgets", [_column("uuid")], primary_key="uuid")

        with caplog.at_level(logging.WARNING, logger="core.schema.registry"):
            registry = SchemaRegistry([first, second])

        assert registry.schema_for("widgets") is first
        assert len(registry) == 2
        assert "Duplicate table 'widgets'" in caplog.text

    def test_tables_is_immutable_tuple(self):
        registry = SchemaRegistry([PROJECTS])
        assert isinstance(registry.tables, tuple)

    def test_default_registry_singleton(self):
        reset_registry()
        try:
            first = get_registry()
            assert first is get_registry()
            assert first.table_names[0] == "projects"
        finally:
            reset_registry()
