# ============================================================================
# CLAUDE CONTEXT - APP STATE TABLES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Table definition - Presence and local session state
# PURPOSE: Shared presence record plus device-only session cache
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================
"""
App State Tables

app_state is the presence record visible through the backend (online flag,
last seen, client version). local_app_state caches the session on the
device only; it has no relational columns and therefore produces no SQL.
"""

from core.contracts import AbstractType, SyncDestination
from core.models.descriptors import ColumnDescriptor, TableDescriptor

_ALL = SyncDestination.everything()
_LOCAL = frozenset({SyncDestination.LOCAL})


APP_STATE = TableDescriptor(
    table_name="app_state",
    columns=[
        ColumnDescriptor(name="user_id", abstract_type=AbstractType.UUID, sync_destinations=_ALL, is_unique=True),
        ColumnDescriptor(name="is_online", abstract_type=AbstractType.BOOLEAN, sync_destinations=_ALL),
        ColumnDescriptor(name="last_seen", abstract_type=AbstractType.TIMESTAMP, sync_destinations=_ALL),
        ColumnDescriptor(name="device_type", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
        ColumnDescriptor(name="app_version", abstract_type=AbstractType.TEXT, sync_destinations=_ALL),
    ],
    primary_key="user_id",
)


LOCAL_APP_STATE = TableDescriptor(
    table_name="local_app_state",
    columns=[
        ColumnDescriptor(name="id", abstract_type=AbstractType.UUID, sync_destinations=_LOCAL, is_unique=True),
        ColumnDescriptor(name="auth_state", abstract_type=AbstractType.TEXT, sync_destinations=_LOCAL),
        ColumnDescriptor(name="user_profile", abstract_type=AbstractType.BINARY, encrypted=True, sync_destinations=_LOCAL),
        ColumnDescriptor(name="user_avatar_url", abstract_type=AbstractType.TEXT, sync_destinations=_LOCAL),
        ColumnDescriptor(name="users_public_username", abstract_type=AbstractType.TEXT, sync_destinations=_LOCAL),
        ColumnDescriptor(name="is_jwt_expired", abstract_type=AbstractType.BOOLEAN, sync_destinations=_LOCAL),
        ColumnDescriptor(name="session_token", abstract_type=AbstractType.TEXT, encrypted=True, sync_destinations=_LOCAL),
        ColumnDescriptor(name="refresh_token", abstract_type=AbstractType.TEXT, encrypted=True, sync_destinations=_LOCAL),
        ColumnDescriptor(name="preferences", abstract_type=AbstractType.BINARY, encrypted=True, sync_destinations=_LOCAL),
        ColumnDescriptor(name="last_sync_timestamp", abstract_type=AbstractType.TIMESTAMP, sync_destinations=_LOCAL),
        ColumnDescriptor(name="offline_mode", abstract_type=AbstractType.BOOLEAN, sync_destinations=_LOCAL),
        ColumnDescriptor(name="created_at", abstract_type=AbstractType.TIMESTAMP, sync_destinations=_LOCAL),
        ColumnDescriptor(name="updated_at", abstract_type=AbstractType.TIMESTAMP, sync_destinations=_LOCAL),
    ],
    primary_key="id",
)


__all__ = ["APP_STATE", "LOCAL_APP_STATE"]
