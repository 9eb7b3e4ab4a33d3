# ============================================================================
# CLAUDE CONTEXT - PROJECTS TABLE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Table definition - User projects
# PURPOSE: Projects created from the desktop client
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================
"""
Projects Table

A project belongs to the user who created it (owner_id). The logo image
itself stays on-device and in the private document container; only its
URL reaches the relational backend.

Maps to: projects
"""

from core.contracts import AbstractType, ContainerVisibility, SyncDestination
from core.models.descriptors import ColumnDescriptor, TableDescriptor

_ALL = SyncDestination.everything()
_PRIVATE = frozenset({ContainerVisibility.PRIVATE})

PROJECTS = TableDescriptor(
    table_name="projects",
    columns=[
        ColumnDescriptor(
            name="id",
            abstract_type=AbstractType.UUID,
            sync_destinations=_ALL,
            is_unique=True,
        ),
        ColumnDescriptor(
            name="owner_id",
            abstract_type=AbstractType.UUID,
            sync_destinations=_ALL,
            containers=_PRIVATE,
        ),
        ColumnDescriptor(
            name="logo",
            abstract_type="image",  # platform image object, never sent to the backend
            encrypted=True,
            sync_destinations=SyncDestination.local_and_document(),
            containers=_PRIVATE,
        ),
        ColumnDescriptor(
            name="logo_url",
            abstract_type=AbstractType.TEXT,
            encrypted=True,
            sync_destinations=_ALL,
        ),
        ColumnDescriptor(
            name="project_name",
            abstract_type=AbstractType.TEXT,
            encrypted=True,
            sync_destinations=_ALL,
            containers=_PRIVATE,
            relational_column_name="project_name",
        ),
        ColumnDescriptor(
            name="project_description",
            abstract_type=AbstractType.TEXT,
            encrypted=True,
            sync_destinations=_ALL,
            containers=_PRIVATE,
            relational_column_name="project_description",
        ),
        ColumnDescriptor(
            name="created_at",
            abstract_type=AbstractType.TIMESTAMP,
            sync_destinations=_ALL,
            containers=_PRIVATE,
        ),
        ColumnDescriptor(
            name="updated_at",
            abstract_type=AbstractType.TIMESTAMP,
            sync_destinations=_ALL,
            containers=_PRIVATE,
        ),
    ],
    primary_key="id",
)


__all__ = ["PROJECTS"]
