# ============================================================================
# CLAUDE CONTEXT - SCHEMA DESCRIPTORS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core model - Column and table descriptors
# PURPOSE: Declarative description of synced tables and their columns
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: ColumnDescriptor, TableDescriptor
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema Descriptors

A TableDescriptor is static metadata describing one logical entity; each of
its ColumnDescriptors says which storage tiers carry the field, whether the
client encrypts it, and whether it is unique.

Descriptors are compiled-in constants. They are validated once at
construction and never mutated afterwards (frozen models).

Example:
    TableDescriptor(
        table_name="widgets",
        columns=[
            ColumnDescriptor(name="id", abstract_type="uuid",
                             sync_destinations=SyncDestination.everything()),
            ColumnDescriptor(name="owner_id", abstract_type="uuid",
                             sync_destinations=[SyncDestination.RELATIONAL]),
        ],
        primary_key="id",
    )
"""

from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from core.contracts import ContainerVisibility, SyncDestination


class ColumnDescriptor(BaseModel):
    """
    One column of one table.

    `encrypted` is documentation only: generators annotate encrypted
    columns but never enforce encryption.
    """

    name: str = Field(..., min_length=1, description="Column name, unique within its table")
    abstract_type: str = Field(
        ..., min_length=1,
        description="Abstract type tag (see AbstractType); unknown tags map to TEXT",
    )
    encrypted: bool = Field(default=False, description="Encrypted on the client")
    sync_destinations: FrozenSet[SyncDestination] = Field(
        ..., min_length=1,
        description="Storage tiers carrying this column",
    )
    containers: Optional[FrozenSet[ContainerVisibility]] = Field(
        default=None,
        description="Document-store containers (None = unspecified)",
    )
    is_unique: bool = Field(default=False)
    relational_column_name: Optional[str] = Field(
        default=None,
        description="Backend column name override (informational only)",
    )

    model_config = {"frozen": True}

    @field_validator("abstract_type", mode="before")
    @classmethod
    def unwrap_enum(cls, v):
        """Accept AbstractType members as well as raw tags."""
        if isinstance(v, Enum):
            return v.value
        return v

    def syncs_to(self, destination: SyncDestination) -> bool:
        return destination in self.sync_destinations

    @property
    def is_relational(self) -> bool:
        """True if the column is carried to the relational backend."""
        return SyncDestination.RELATIONAL in self.sync_destinations


class TableDescriptor(BaseModel):
    """
    One logical entity.

    `table_name` is used verbatim as the backend identifier; no escaping is
    applied, so it must be a valid identifier by construction.
    """

    table_name: str = Field(..., min_length=1)
    columns: Tuple[ColumnDescriptor, ...] = Field(..., min_length=1)
    primary_key: Optional[str] = Field(
        default=None,
        description="Name of the primary key column, if any",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_columns(self) -> "TableDescriptor":
        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise ValueError(
                    f"Duplicate column '{column.name}' in table '{self.table_name}'"
                )
            seen.add(column.name)

        if self.primary_key is not None and self.primary_key not in seen:
            raise ValueError(
                f"Primary key '{self.primary_key}' is not a column of '{self.table_name}'"
            )

        # A backend table must carry its own key
        if (
            self.primary_key is not None
            and self.is_relational
            and not self.column(self.primary_key).is_relational
        ):
            raise ValueError(
                f"Primary key '{self.primary_key}' of '{self.table_name}' is not synced "
                f"to the relational store but other columns are"
            )
        return self

    # ----------------------------------------------------------------
    # Lookups
    # ----------------------------------------------------------------

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        """Get a column by name (None if absent)."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def has_column(self, name: str) -> bool:
        return self.column(name) is not None

    def relational_columns(self) -> List[ColumnDescriptor]:
        """Columns carried to the relational backend, in declaration order."""
        return [c for c in self.columns if c.is_relational]

    @property
    def is_relational(self) -> bool:
        """False for tables that live only on-device or in the document store."""
        return any(c.is_relational for c in self.columns)


__all__ = ["ColumnDescriptor", "TableDescriptor"]
