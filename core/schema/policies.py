# ============================================================================
# CLAUDE CONTEXT - ROW LEVEL SECURITY RULES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - RLS policy selection
# PURPOSE: Ordered (predicate, builder) rules choosing each table's policies
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: PolicyRule, PolicySelection, POLICY_RULES, OWNER_COLUMNS,
#          select_policy
# DEPENDENCIES: psycopg
# ============================================================================
"""
Row Level Security Rules

Rules are evaluated in order and the first match wins:

    1. user_table      - table name contains "user" -> caller owns the row
                         whose primary key equals their id
    2. owner_column    - a relational column named user_id or owner_id ->
                         caller owns rows where that column equals their id
    3. authenticated   - any authenticated caller may read/write any row

Precedence must not be reordered: a table named
`superusers` without a user_id column is still keyed on its primary key.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from psycopg import sql

from core.models.descriptors import ColumnDescriptor, TableDescriptor
from core.schema.ddl_utils import PolicyBuilder

USER_TABLE_MARKER = "user"

# Checked in this order when a table has both
OWNER_COLUMNS = ("user_id", "owner_id")


@dataclass(frozen=True)
class PolicySelection:
    """Outcome of rule selection for one table."""
    rule: str
    comment: str
    check: sql.Composable
    key_column: Optional[str] = None


@dataclass(frozen=True)
class PolicyRule:
    """
    One entry of the precedence chain.

    applies(table, relational_columns) decides whether the rule matches;
    build(table, relational_columns, role) produces the selection.
    """
    name: str
    applies: Callable[[TableDescriptor, Sequence[ColumnDescriptor]], bool]
    build: Callable[[TableDescriptor, Sequence[ColumnDescriptor], str], PolicySelection]


# ============================================================================
# RULES
# ============================================================================

def _owner_column(columns: Sequence[ColumnDescriptor]) -> Optional[str]:
    names = {c.name for c in columns}
    for candidate in OWNER_COLUMNS:
        if candidate in names:
            return candidate
    return None


def _is_user_table(table: TableDescriptor, columns: Sequence[ColumnDescriptor]) -> bool:
    # Needs a primary key to compare the caller against
    return USER_TABLE_MARKER in table.table_name and table.primary_key is not None


def _build_user_table(table, columns, role) -> PolicySelection:
    return PolicySelection(
        rule="user_table",
        comment="Users can only access their own data",
        check=PolicyBuilder.ownership_check(table.primary_key),
        key_column=table.primary_key,
    )


def _has_owner_column(table: TableDescriptor, columns: Sequence[ColumnDescriptor]) -> bool:
    return _owner_column(columns) is not None


def _build_owner_column(table, columns, role) -> PolicySelection:
    column = _owner_column(columns)
    return PolicySelection(
        rule="owner_column",
        comment="Resources owned by users",
        check=PolicyBuilder.ownership_check(column),
        key_column=column,
    )


def _always(table: TableDescriptor, columns: Sequence[ColumnDescriptor]) -> bool:
    return True


def _build_authenticated(table, columns, role) -> PolicySelection:
    return PolicySelection(
        rule="authenticated",
        comment=f"Default policies for {role} users",
        check=PolicyBuilder.role_check(role),
    )


POLICY_RULES = (
    PolicyRule("user_table", _is_user_table, _build_user_table),
    PolicyRule("owner_column", _has_owner_column, _build_owner_column),
    PolicyRule("authenticated", _always, _build_authenticated),
)


def select_policy(
    table: TableDescriptor,
    columns: Sequence[ColumnDescriptor],
    role: str = "authenticated",
) -> PolicySelection:
    """
    Select the policy set for a table (first matching rule).

    Args:
        table: Table descriptor
        columns: The table's relationally-synced columns
        role: Role required by the fallback rule

    Returns:
        PolicySelection describing the check to apply
    """
    for rule in POLICY_RULES:
        if rule.applies(table, columns):
            return rule.build(table, columns, role)
    raise AssertionError("POLICY_RULES must end with a catch-all rule")


__all__ = [
    "PolicyRule",
    "PolicySelection",
    "POLICY_RULES",
    "OWNER_COLUMNS",
    "USER_TABLE_MARKER",
    "select_policy",
]
