# ============================================================================
# CLAUDE CONTEXT - DDL UTILITIES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - DRY utilities for SQL DDL generation
# PURPOSE: Type mapping plus table, index, constraint, trigger, comment and
#          policy builders using psycopg.sql
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: TYPE_MAP, get_postgres_type, TableBuilder, IndexBuilder,
#          ConstraintBuilder, TriggerBuilder, CommentBuilder, PolicyBuilder,
#          SchemaUtils, render
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders return psycopg.sql.Composed objects. Table and column names
come from compiled-in descriptors and are emitted verbatim (sql.SQL, not
sql.Identifier); policy names are quoted identifiers and comment text is a
literal.

Usage:
    from core.schema.ddl_utils import IndexBuilder, render

    idx = IndexBuilder.btree('projects', 'owner_id')
    render(idx)
    # CREATE INDEX IF NOT EXISTS idx_projects_owner_id ON projects(owner_id)
"""

from typing import List, Optional, Sequence

from psycopg import sql


# ============================================================================
# TYPE MAPPING
# ============================================================================

FALLBACK_TYPE = "TEXT"

TYPE_MAP = {
    # Abstract types
    "text": "TEXT",
    "integer": "INTEGER",
    "float": "DOUBLE PRECISION",
    "boolean": "BOOLEAN",
    "timestamp": "TIMESTAMP WITH TIME ZONE",
    "uuid": "UUID",
    "binary": "BYTEA",

    # Aliases
    "string": "TEXT",
    "int": "INTEGER",
    "double": "DOUBLE PRECISION",
    "bool": "BOOLEAN",
    "date": "TIMESTAMP WITH TIME ZONE",
    "data": "BYTEA",
    "blob": "BYTEA",
}


def get_postgres_type(abstract_type: str) -> str:
    """
    Map an abstract type tag to a PostgreSQL type.

    Unknown tags map to TEXT rather than failing, so new abstract types
    introduced upstream still produce a usable column.

    Args:
        abstract_type: Abstract type tag (e.g. "uuid", "timestamp")

    Returns:
        PostgreSQL type string
    """
    key = str(getattr(abstract_type, "value", abstract_type)).strip().lower()
    return TYPE_MAP.get(key, FALLBACK_TYPE)


def _name(value: str) -> sql.SQL:
    """Verbatim identifier (descriptors are trusted, compiled-in constants)."""
    return sql.SQL(value)


def render(statement: sql.Composable) -> str:
    """Render a statement to text without a database connection."""
    return statement.as_string(None)


def _literal(value: str) -> sql.SQL:
    """
    Quoted string literal.

    psycopg prefixes escape-string literals (E'...') with a space; it is
    stripped so templates control the spacing.
    """
    return sql.SQL(render(sql.Literal(value)).lstrip())


# ============================================================================
# TABLE BUILDER
# ============================================================================

class TableBuilder:
    """
    Builder for CREATE TABLE statements.
    """

    @staticmethod
    def column(
        name: str,
        sql_type: str,
        not_null: bool = False,
        unique: bool = False,
        primary_key: bool = False,
    ) -> sql.Composed:
        """
        Column definition line: <name> <type> [NOT NULL] [UNIQUE] [PRIMARY KEY].
        """
        parts: List[sql.Composable] = [
            sql.SQL("    "),
            _name(name),
            sql.SQL(" "),
            sql.SQL(sql_type),
        ]
        if not_null:
            parts.append(sql.SQL(" NOT NULL"))
        if unique:
            parts.append(sql.SQL(" UNIQUE"))
        if primary_key:
            parts.append(sql.SQL(" PRIMARY KEY"))
        return sql.Composed(parts)

    @staticmethod
    def create(table: str, columns: Sequence[sql.Composable]) -> sql.Composed:
        """
        CREATE TABLE IF NOT EXISTS with one column per line.
        """
        return sql.SQL("CREATE TABLE IF NOT EXISTS {table} (\n{columns}\n)").format(
            table=_name(table),
            columns=sql.SQL(",\n").join(columns),
        )


# ============================================================================
# INDEX BUILDER
# ============================================================================

class IndexBuilder:
    """
    Builder for PostgreSQL index DDL statements.

    All methods are static and return sql.Composed objects.
    """

    @staticmethod
    def _generate_index_name(table: str, column: str, prefix: str = 'idx') -> str:
        """Generate conventional index name."""
        return f"{prefix}_{table}_{column}"

    @staticmethod
    def btree(table: str, column: str, name: Optional[str] = None) -> sql.Composed:
        """
        Create single-column B-tree index.

        Args:
            table: Table name
            column: Column to index
            name: Optional custom index name (default idx_<table>_<column>)

        Returns:
            sql.Composed CREATE INDEX statement
        """
        idx_name = name or IndexBuilder._generate_index_name(table, column)

        return sql.SQL("CREATE INDEX IF NOT EXISTS {name} ON {table}({column})").format(
            name=_name(idx_name),
            table=_name(table),
            column=_name(column),
        )


# ============================================================================
# CONSTRAINT BUILDER
# ============================================================================

class ConstraintBuilder:
    """
    Builder for ALTER TABLE ... ADD CONSTRAINT statements.
    """

    @staticmethod
    def foreign_key(
        table: str,
        column: str,
        referenced_table: str,
        referenced_column: str,
        name: Optional[str] = None,
    ) -> sql.Composed:
        """
        Foreign key with ON DELETE CASCADE (named fk_<table>_<column>).
        """
        fk_name = name or f"fk_{table}_{column}"

        return sql.SQL(
            "ALTER TABLE {table} ADD CONSTRAINT {name}\n"
            "    FOREIGN KEY ({column}) REFERENCES {ref_table}({ref_column}) ON DELETE CASCADE"
        ).format(
            table=_name(table),
            name=_name(fk_name),
            column=_name(column),
            ref_table=_name(referenced_table),
            ref_column=_name(referenced_column),
        )


# ============================================================================
# TRIGGER BUILDER
# ============================================================================

class TriggerBuilder:
    """
    Builder for PostgreSQL trigger DDL statements.
    """

    @staticmethod
    def updated_at_function(function_name: str = "update_modified_column") -> sql.Composed:
        """
        Create the shared trigger function that touches updated_at.
        """
        return sql.SQL(
            "CREATE OR REPLACE FUNCTION {function}()\n"
            "RETURNS TRIGGER AS $$\n"
            "BEGIN\n"
            "    NEW.updated_at = now();\n"
            "    RETURN NEW;\n"
            "END;\n"
            "$$ language 'plpgsql'"
        ).format(function=_name(function_name))

    @staticmethod
    def updated_at_trigger(
        table: str,
        function_name: str = "update_modified_column",
        trigger_name: Optional[str] = None,
    ) -> List[sql.Composed]:
        """
        Create trigger that calls the updated_at function before UPDATE.

        Returns DROP + CREATE for idempotency.
        """
        trig_name = trigger_name or f"set_{table}_updated_at"

        drop_stmt = sql.SQL("DROP TRIGGER IF EXISTS {name} ON {table}").format(
            name=_name(trig_name),
            table=_name(table),
        )

        create_stmt = sql.SQL(
            "CREATE TRIGGER {name}\n"
            "BEFORE UPDATE ON {table}\n"
            "FOR EACH ROW\n"
            "EXECUTE FUNCTION {function}()"
        ).format(
            name=_name(trig_name),
            table=_name(table),
            function=_name(function_name),
        )

        return [drop_stmt, create_stmt]


# ============================================================================
# COMMENT BUILDER
# ============================================================================

class CommentBuilder:
    """
    Builder for PostgreSQL COMMENT statements.
    """

    @staticmethod
    def column(table: str, column: str, comment: str) -> sql.Composed:
        """Add comment to column."""
        return sql.SQL("COMMENT ON COLUMN {}.{} IS {}").format(
            _name(table),
            _name(column),
            _literal(comment),
        )


# ============================================================================
# POLICY BUILDER
# ============================================================================

POLICY_COMMANDS = ("SELECT", "INSERT", "UPDATE", "DELETE")


class PolicyBuilder:
    """
    Builder for row-level-security statements.
    """

    @staticmethod
    def enable_rls(table: str) -> sql.Composed:
        return sql.SQL("ALTER TABLE {} ENABLE ROW LEVEL SECURITY").format(_name(table))

    @staticmethod
    def ownership_check(column: str) -> sql.Composed:
        """Caller identity must equal the given column."""
        return sql.SQL("auth.uid()::text = {}::text").format(_name(column))

    @staticmethod
    def role_check(role: str) -> sql.Composed:
        """Caller must hold the given role; no row filter."""
        return sql.SQL("auth.role() = {}").format(_literal(role))

    @staticmethod
    def policy(table: str, command: str, check: sql.Composable) -> sql.Composed:
        """
        CREATE POLICY "<table>_auth_<command>".

        INSERT policies use WITH CHECK; all others use USING.
        """
        clause = "WITH CHECK" if command == "INSERT" else "USING"

        return sql.SQL("CREATE POLICY {name} ON {table} FOR {command}\n    {clause} ({check})").format(
            name=sql.Identifier(f"{table}_auth_{command.lower()}"),
            table=_name(table),
            command=sql.SQL(command),
            clause=sql.SQL(clause),
            check=check,
        )

    @staticmethod
    def policy_set(table: str, check: sql.Composable) -> List[sql.Composed]:
        """One policy per command, in SELECT, INSERT, UPDATE, DELETE order."""
        return [PolicyBuilder.policy(table, command, check) for command in POLICY_COMMANDS]


# ============================================================================
# SCHEMA UTILITIES
# ============================================================================

class SchemaUtils:
    """
    Transaction delimiters for generated scripts.
    """

    @staticmethod
    def begin() -> sql.SQL:
        return sql.SQL("BEGIN")

    @staticmethod
    def commit() -> sql.SQL:
        return sql.SQL("COMMIT")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'FALLBACK_TYPE',
    'TYPE_MAP',
    'get_postgres_type',
    'render',
    'TableBuilder',
    'IndexBuilder',
    'ConstraintBuilder',
    'TriggerBuilder',
    'CommentBuilder',
    'PolicyBuilder',
    'POLICY_COMMANDS',
    'SchemaUtils',
]
