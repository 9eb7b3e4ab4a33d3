# ============================================================================
# SCHEMA REGISTRY
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Table descriptor registration and lookup
# PURPOSE: Single source of truth for which tables and columns exist
# CREATED: 17 OCT 2026
# ============================================================================
"""
Schema Registry

Ordered, read-only collection of table descriptors. Generators receive a
registry explicitly; `get_registry()` builds the default one from the
application's compiled-in tables on first use.

Design:
- Tables are held as a tuple; order is generation order
- Lookup by table name, first match wins
- Duplicate table names are accepted but logged
- Never mutated after construction, safe to share across threads
"""

import logging
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from core.contracts import ContainerVisibility, SyncDestination
from core.models.descriptors import ColumnDescriptor, TableDescriptor

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    Immutable registry of table descriptors.

    Example:
        registry = SchemaRegistry([PROJECTS, USERS_PUBLIC])
        registry.primary_key("projects")                  # "id"
        registry.is_encrypted("projects", "logo_url")     # True
    """

    def __init__(self, tables: Iterable[TableDescriptor]):
        self._tables: Tuple[TableDescriptor, ...] = tuple(tables)

        seen = set()
        for table in self._tables:
            if table.table_name in seen:
                logger.warning(
                    f"Duplicate table '{table.table_name}' in registry; "
                    f"lookups resolve to the first definition"
                )
            seen.add(table.table_name)

        logger.debug(f"SchemaRegistry created with {len(self._tables)} tables")

    # ========================================================================
    # COLLECTION ACCESS
    # ========================================================================

    @property
    def tables(self) -> Tuple[TableDescriptor, ...]:
        """All tables in generation order."""
        return self._tables

    @property
    def table_names(self) -> Tuple[str, ...]:
        return tuple(t.table_name for t in self._tables)

    def __iter__(self) -> Iterator[TableDescriptor]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, table_name: object) -> bool:
        return self.schema_for(table_name) is not None  # type: ignore[arg-type]

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    def schema_for(self, table_name: str) -> Optional[TableDescriptor]:
        """Get a table by name (first match), or None."""
        for table in self._tables:
            if table.table_name == table_name:
                return table
        return None

    def _column(self, table_name: str, column_name: str) -> Optional[ColumnDescriptor]:
        table = self.schema_for(table_name)
        if table is None:
            return None
        return table.column(column_name)

    def sync_destinations(
        self, table_name: str, column_name: str
    ) -> Optional[FrozenSet[SyncDestination]]:
        column = self._column(table_name, column_name)
        return column.sync_destinations if column else None

    def is_encrypted(self, table_name: str, column_name: str) -> Optional[bool]:
        column = self._column(table_name, column_name)
        return column.encrypted if column else None

    def containers(
        self, table_name: str, column_name: str
    ) -> Optional[FrozenSet[ContainerVisibility]]:
        column = self._column(table_name, column_name)
        return column.containers if column else None

    def is_unique(self, table_name: str, column_name: str) -> Optional[bool]:
        column = self._column(table_name, column_name)
        return column.is_unique if column else None

    def primary_key(self, table_name: str) -> Optional[str]:
        table = self.schema_for(table_name)
        return table.primary_key if table else None


# ============================================================================
# DEFAULT REGISTRY
# ============================================================================

_registry: Optional[SchemaRegistry] = None


def get_registry() -> SchemaRegistry:
    """Get the default registry built from the application tables."""
    global _registry
    if _registry is None:
        from core.models import APP_TABLES
        _registry = SchemaRegistry(APP_TABLES)
    return _registry


def reset_registry() -> None:
    """Reset the default registry (for testing)."""
    global _registry
    _registry = None


__all__ = ["SchemaRegistry", "get_registry", "reset_registry"]
