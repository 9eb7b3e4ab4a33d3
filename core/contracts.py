# ============================================================================
# CLAUDE CONTEXT - BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Foundation - Schema vocabulary enums
# PURPOSE: Define sync destinations, container visibility and abstract types
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: SyncDestination, ContainerVisibility, AbstractType
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the DataSync schema layer.

These define the vocabulary shared by every table descriptor:
- Where a column is stored (local store, document store, relational store)
- Which document-store container(s) a column lives in
- The storage-agnostic type tag of a column

Table descriptors and generators consume these; nothing here does I/O.
"""

from enum import Enum
from typing import FrozenSet


# ============================================================================
# SYNC DESTINATIONS
# ============================================================================

class SyncDestination(str, Enum):
    """
    Storage tiers a column can be carried to.

    Only RELATIONAL columns take part in SQL generation.
    """
    LOCAL = "local"              # On-device store
    DOCUMENT = "document"        # Cloud document store
    RELATIONAL = "relational"    # Relational backend (Supabase/Postgres)

    @classmethod
    def everything(cls) -> FrozenSet["SyncDestination"]:
        """All tiers - the shorthand for a fully synced column."""
        return frozenset(cls)

    @classmethod
    def local_and_document(cls) -> FrozenSet["SyncDestination"]:
        """Device + cloud document store, never the relational backend."""
        return frozenset({cls.LOCAL, cls.DOCUMENT})


class ContainerVisibility(str, Enum):
    """Document-store container a column is written to."""
    PUBLIC = "public"
    PRIVATE = "private"
    SHARED = "shared"

    @classmethod
    def public_and_private(cls) -> FrozenSet["ContainerVisibility"]:
        return frozenset({cls.PUBLIC, cls.PRIVATE})

    @classmethod
    def shared_and_private(cls) -> FrozenSet["ContainerVisibility"]:
        return frozenset({cls.SHARED, cls.PRIVATE})


# ============================================================================
# ABSTRACT TYPES
# ============================================================================

class AbstractType(str, Enum):
    """
    Storage-agnostic column type tags.

    Column descriptors hold the tag as a plain string so that tags outside
    this set can still be declared; the type mapper falls back to TEXT.
    """
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    UUID = "uuid"
    BINARY = "binary"


__all__ = ["SyncDestination", "ContainerVisibility", "AbstractType"]
