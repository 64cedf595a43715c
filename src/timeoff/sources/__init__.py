from __future__ import annotations

from .base import Snapshot, TimeOffDataSource, load_snapshot
from .json_source import JsonDataSource
from .mock import MockDataSource, MockSourceConfig
from .tenancy import TenantConfig, TenantRegistry, resolve_tenant_id

__all__ = [
    "Snapshot",
    "TimeOffDataSource",
    "load_snapshot",
    "JsonDataSource",
    "MockDataSource",
    "MockSourceConfig",
    "TenantConfig",
    "TenantRegistry",
    "resolve_tenant_id",
]
