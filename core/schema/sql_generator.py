# ============================================================================
# CLAUDE CONTEXT - SCHEMA TO SQL GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Migration script generation from table descriptors
# PURPOSE: Compile the schema registry into idempotent Supabase SQL scripts
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: SchemaToSQL, generate_complete_sql, generate_all_schemas_sql,
#          generate_foreign_key_sql, generate_rls_policies_sql,
#          generate_schema_sql
# DEPENDENCIES: psycopg
# ============================================================================
"""
Schema Registry to PostgreSQL Script Generator.

Table descriptors are the SINGLE SOURCE OF TRUTH for the backend schema.
Only columns synced to the relational store are emitted; a table with none
is invisible to the backend and produces no SQL at all.

Script order (each part its own transaction, committed independently):
    1. Tables, encrypted-column comments, indexes
    2. Foreign keys inferred from column names
    3. updated_at trigger function and per-table triggers
    4. Row level security policies

Every statement is guarded (IF NOT EXISTS, OR REPLACE, DROP ... IF EXISTS)
except foreign keys and policies, so the tables part can be re-run.
The "-- Generated on:" header lines are the only non-deterministic output.

Usage:
    generator = SchemaToSQL(get_registry())
    script = generator.complete_sql()
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from psycopg import sql

from core.config import GeneratorDefaults, get_defaults
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models.descriptors import TableDescriptor
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
from core.schema.naming import FOREIGN_KEY_SUFFIX, infer_referenced_table, is_index_candidate
from core.schema.policies import PolicySelection, select_policy
from core.schema.registry import SchemaRegistry, get_registry

logger = get_logger(__name__, ComponentType.GENERATOR)

UPDATED_AT_COLUMN = "updated_at"
GENERATED_ON_PREFIX = "-- Generated on: "


def _statement(stmt: sql.Composable) -> str:
    return render(stmt) + ";\n"


class SchemaToSQL:
    """
    Convert a schema registry to PostgreSQL migration scripts.

    Pure transformation: no database connection and no I/O.
    """

    def __init__(
        self,
        registry: Optional[SchemaRegistry] = None,
        config: Optional[GeneratorDefaults] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the generator.

        Args:
            registry: Tables to compile (default: application registry)
            config: Generation defaults (default: from environment)
            clock: Source of the header timestamp (default: UTC now)
        """
        self.registry = registry if registry is not None else get_registry()
        self.config = config or get_defaults().generator
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # =========================================================================
    # TABLE GENERATION
    # =========================================================================

    def table_statements(self, table: TableDescriptor) -> List[sql.Composed]:
        """
        CREATE TABLE plus one COMMENT per encrypted column.

        Returns [] for a table without relational columns.
        """
        columns = table.relational_columns()
        if not columns:
            return []

        definitions = []
        for column in columns:
            is_pk = column.name == table.primary_key
            definitions.append(TableBuilder.column(
                column.name,
                get_postgres_type(column.abstract_type),
                not_null=is_pk,
                unique=column.is_unique,
                primary_key=is_pk,
            ))

        statements = [TableBuilder.create(table.table_name, definitions)]
        statements.extend(
            CommentBuilder.column(table.table_name, column.name, self.config.encrypted_comment)
            for column in columns
            if column.encrypted
        )
        return statements

    def generate_table(self, table: TableDescriptor) -> str:
        """
        DDL text for one table, or "" if nothing is synced to the backend.
        """
        with log_context(table=table.table_name, operation="create_table"):
            statements = self.table_statements(table)
            if not statements:
                logger.debug("No relational columns, skipping table")
                return ""

            create, comments = statements[0], statements[1:]
            out = f"-- Create table {table.table_name} if it doesn't exist\n"
            out += _statement(create) + "\n"

            if comments:
                out += "-- Fields marked as encrypted in the client application\n"
                out += "".join(_statement(c) for c in comments)
                out += "\n"

            logger.debug(f"Generated table with {len(comments)} encrypted column comments")
            return out

    # =========================================================================
    # INDEX GENERATION
    # =========================================================================

    def generate_indexes(self, table: TableDescriptor) -> List[sql.Composed]:
        """
        Primary key index plus heuristic secondary indexes.

        Secondary indexes cover relational, non-key columns matching the
        naming rules (see core.schema.naming).
        """
        columns = table.relational_columns()
        if not columns:
            return []

        result = []
        if table.primary_key is not None:
            result.append(IndexBuilder.btree(table.table_name, table.primary_key))

        for column in columns:
            if column.name == table.primary_key:
                continue
            if is_index_candidate(column.name):
                result.append(IndexBuilder.btree(table.table_name, column.name))

        return result

    # =========================================================================
    # FOREIGN KEY INFERENCE
    # =========================================================================

    def generate_foreign_keys(self) -> List[sql.Composed]:
        """
        Foreign keys inferred from `<table>_id` column names.

        The referenced table is not required to have relational columns of
        its own; only a primary key is needed to build the reference.
        """
        table_names = set(self.registry.table_names)
        result = []

        for table in self.registry:
            for column in table.relational_columns():
                if column.name == table.primary_key or not column.name.endswith(FOREIGN_KEY_SUFFIX):
                    continue

                referenced = infer_referenced_table(column.name, table_names)
                if referenced is None:
                    logger.debug(f"No table matches {table.table_name}.{column.name}")
                    continue

                referenced_pk = self.registry.primary_key(referenced)
                if referenced_pk is None:
                    logger.debug(
                        f"{table.table_name}.{column.name} -> {referenced} skipped, "
                        f"{referenced} has no primary key"
                    )
                    continue

                result.append(ConstraintBuilder.foreign_key(
                    table.table_name, column.name, referenced, referenced_pk
                ))

        logger.info(f"Inferred {len(result)} foreign keys")
        return result

    # =========================================================================
    # TRIGGERS
    # =========================================================================

    def tables_with_updated_at(self) -> List[TableDescriptor]:
        """Tables whose updated_at column exists in the backend."""
        result = []
        for table in self.registry:
            column = table.column(UPDATED_AT_COLUMN)
            if column is not None and column.is_relational:
                result.append(table)
        return result

    def generate_triggers(self) -> List[sql.Composed]:
        """Shared updated_at function followed by DROP + CREATE per table."""
        function_name = self.config.trigger_function
        statements = [TriggerBuilder.updated_at_function(function_name)]
        for table in self.tables_with_updated_at():
            statements.extend(TriggerBuilder.updated_at_trigger(table.table_name, function_name))
        return statements

    # =========================================================================
    # ROW LEVEL SECURITY
    # =========================================================================

    def select_policy(self, table: TableDescriptor) -> Optional[PolicySelection]:
        """Policy rule for a table, or None if it has no relational columns."""
        columns = table.relational_columns()
        if not columns:
            return None
        return select_policy(table, columns, self.config.authenticated_role)

    def generate_policies(self, table: TableDescriptor) -> List[sql.Composed]:
        """ENABLE ROW LEVEL SECURITY followed by four policies."""
        selection = self.select_policy(table)
        if selection is None:
            return []
        return [PolicyBuilder.enable_rls(table.table_name)] + PolicyBuilder.policy_set(
            table.table_name, selection.check
        )

    # =========================================================================
    # SCRIPTS
    # =========================================================================

    def _generated_on(self) -> str:
        return f"{GENERATED_ON_PREFIX}{self._clock().isoformat()}\n"

    def tables_sql(
        self,
        label: Optional[str] = None,
        tables: Optional[Iterable[TableDescriptor]] = None,
    ) -> str:
        """
        Tables transaction: CREATE TABLE statements then indexes.

        Args:
            label: Schema label for the header (default from config)
            tables: Subset of tables (default: whole registry)
        """
        label = label or self.config.schema_label
        tables = list(tables) if tables is not None else list(self.registry)

        with log_context(schema_label=label, operation="tables"):
            out = f"-- Generated SQL for {self.config.backend_label} from DataSync schema: {label}\n"
            out += self._generated_on() + "\n"
            out += _statement(SchemaUtils.begin()) + "\n"

            emitted = 0
            for table in tables:
                table_sql = self.generate_table(table)
                if table_sql:
                    out += table_sql
                    emitted += 1

            out += "-- Create indexes for better query performance\n"
            for table in tables:
                indexes = self.generate_indexes(table)
                if not indexes:
                    continue
                out += "".join(_statement(idx) for idx in indexes)
                out += "\n"

            out += _statement(SchemaUtils.commit())

            log_checkpoint("tables_script_generated", {"tables": emitted})
            return out

    def schema_sql_for_table(self, table_name: str) -> str:
        """Tables script for a single table, or a not-found placeholder."""
        table = self.registry.schema_for(table_name)
        if table is None:
            logger.info(f"Schema not found for table: {table_name}")
            return f"-- Schema not found for table: {table_name}"
        return self.tables_sql(label=table_name, tables=[table])

    def foreign_keys_sql(self) -> str:
        """Foreign keys transaction."""
        out = "-- Foreign Key Relationships\n\n"
        out += _statement(SchemaUtils.begin()) + "\n"
        for fk in self.generate_foreign_keys():
            out += _statement(fk) + "\n"
        out += _statement(SchemaUtils.commit())
        return out

    def triggers_sql(self) -> str:
        """updated_at trigger function and triggers transaction."""
        function, *triggers = self.generate_triggers()
        tables = self.tables_with_updated_at()

        out = "-- Custom Functions and Triggers\n\n"
        out += _statement(SchemaUtils.begin()) + "\n"
        out += "-- Function to automatically update updated_at timestamp\n"
        out += _statement(function) + "\n"

        # DROP + CREATE pair per table
        for table, drop_stmt, create_stmt in zip(tables, triggers[0::2], triggers[1::2]):
            out += f"-- Add updated_at trigger for {table.table_name}\n"
            out += _statement(drop_stmt)
            out += _statement(create_stmt) + "\n"

        out += _statement(SchemaUtils.commit())
        return out

    def rls_sql(self) -> str:
        """Row level security transaction."""
        out = "-- Setup Row Level Security policies\n"
        out += _statement(SchemaUtils.begin()) + "\n"

        for table in self.registry:
            with log_context(table=table.table_name, operation="rls"):
                selection = self.select_policy(table)
                if selection is None:
                    continue

                logger.debug(f"Policy rule '{selection.rule}' selected")
                enable, *policies = self.generate_policies(table)
                out += _statement(enable)
                out += f"-- {selection.comment}\n"
                for policy in policies:
                    out += _statement(policy) + "\n"

        out += _statement(SchemaUtils.commit())
        return out

    def complete_sql(self) -> str:
        """
        Complete setup script: tables, foreign keys, triggers, then RLS.
        """
        out = f"-- Complete {self.config.backend_label} Setup Script\n"
        out += self._generated_on() + "\n"
        out += self.tables_sql()
        out += "\n" + self.foreign_keys_sql()
        out += "\n" + self.triggers_sql()
        out += "\n" + self.rls_sql()

        logger.info(f"Generated complete script for {len(self.registry)} registered tables")
        return out


# ============================================================================
# ENTRY POINTS
# ============================================================================

def generate_complete_sql(registry: Optional[SchemaRegistry] = None) -> str:
    """Full script: tables, foreign keys, triggers, RLS."""
    return SchemaToSQL(registry).complete_sql()


def generate_all_schemas_sql(registry: Optional[SchemaRegistry] = None) -> str:
    """Tables-only script."""
    return SchemaToSQL(registry).tables_sql()


def generate_foreign_key_sql(registry: Optional[SchemaRegistry] = None) -> str:
    """Foreign-keys-only script."""
    return SchemaToSQL(registry).foreign_keys_sql()


def generate_rls_policies_sql(registry: Optional[SchemaRegistry] = None) -> str:
    """RLS-only script."""
    return SchemaToSQL(registry).rls_sql()


def generate_schema_sql(table_name: str, registry: Optional[SchemaRegistry] = None) -> str:
    """Tables script for one table, or a not-found placeholder."""
    return SchemaToSQL(registry).schema_sql_for_table(table_name)


def strip_generated_on(script: str) -> str:
    """Drop the timestamp header lines (for comparing scripts)."""
    return "\n".join(
        line for line in script.splitlines() if not line.startswith(GENERATED_ON_PREFIX)
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'SchemaToSQL',
    'generate_complete_sql',
    'generate_all_schemas_sql',
    'generate_foreign_key_sql',
    'generate_rls_policies_sql',
    'generate_schema_sql',
    'strip_generated_on',
    'GENERATED_ON_PREFIX',
]
