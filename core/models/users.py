# ============================================================================
# CLAUDE CONTEXT - USER TABLES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Table definition - Public profile and private account data
# PURPOSE: Split user data into a public profile and a private record
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================
"""
User Tables

users_public holds what other users may see (username, avatar).
users_private holds account data; phone number, preferences and token
expiry never leave the device and the private document container.

Both tables key directly on the authenticated user's id.
"""

from core.contracts import AbstractType, SyncDestination
from core.models.descriptors import ColumnDescriptor, TableDescriptor

_ALL = SyncDestination.everything()
_DEVICE_AND_CLOUD = SyncDestination.local_and_document()


USERS_PUBLIC = TableDescriptor(
    table_name="users_public",
    columns=[
        ColumnDescriptor(name="id", abstract_type=AbstractType.UUID, sync_destinations=_ALL, is_unique=True),
        ColumnDescriptor(name="username", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
        ColumnDescriptor(name="display_name", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
        ColumnDescriptor(name="avatar_url", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
        ColumnDescriptor(name="created_at", abstract_type=AbstractType.TIMESTAMP, sync_destinations=_ALL),
        ColumnDescriptor(name="signup_source", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
        ColumnDescriptor(name="is_verified", abstract_type=AbstractType.BOOLEAN, sync_destinations=_ALL),
    ],
    primary_key="id",
)


USERS_PRIVATE = TableDescriptor(
    table_name="users_private",
    columns=[
        ColumnDescriptor(name="user_id", abstract_type=AbstractType.UUID, sync_destinations=_ALL, is_unique=True),
        ColumnDescriptor(name="email", abstract_type=AbstractType.TEXT, encrypted=True, sync_destinations=_ALL),
        ColumnDescriptor(
            name="phone_number", abstract_type=AbstractType.TEXT, encrypted=True,
            sync_destinations=_DEVICE_AND_CLOUD,
        ),
        ColumnDescriptor(
            name="preferences", abstract_type=AbstractType.BINARY, encrypted=True,
            sync_destinations=_DEVICE_AND_CLOUD,
        ),
        ColumnDescriptor(name="last_login", abstract_type=AbstractType.TIMESTAMP, sync_destinations=_ALL),
        ColumnDescriptor(name="auth_provider", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
        ColumnDescriptor(
            name="jwt_expires_at", abstract_type=AbstractType.TIMESTAMP,
            sync_destinations=_DEVICE_AND_CLOUD,
        ),
    ],
    primary_key="user_id",
)


__all__ = ["USERS_PUBLIC", "USERS_PRIVATE"]
