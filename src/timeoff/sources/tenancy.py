from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from timeoff.sources.base import TimeOffDataSource
from timeoff.sources.json_source import JsonDataSource
from timeoff.sources.mock import MockDataSource, mock_config_from_mapping

CONNECTOR_KINDS = ("mock", "json", "none")


@dataclass(frozen=True)
class TenantConfig:
    id: str
    name: str
    kind: str = "none"
    options: dict[str, Any] = field(default_factory=dict)


def _parse_tenant(raw: Any) -> TenantConfig:
    if not isinstance(raw, Mapping):
        raise ValueError("Each tenant entry must be an object.")
    tenant_id = str(raw.get("id", "")).strip()
    if not tenant_id:
        raise ValueError("Tenant entry missing 'id'.")
    connector = raw.get("connector") or {"kind": "none"}
    if not isinstance(connector, Mapping):
        raise ValueError(f"Tenant '{tenant_id}': connector must be an object.")
    kind = connector.get("kind", "none")
    if kind not in CONNECTOR_KINDS:
        raise ValueError(
            f"Tenant '{tenant_id}': unsupported connector kind {kind!r} "
            f"(expected one of {', '.join(CONNECTOR_KINDS)})."
        )
    return TenantConfig(
        id=tenant_id,
        name=str(raw.get("name", tenant_id)),
        kind=kind,
        options=dict(connector.get("config") or {}),
    )


class TenantRegistry:
    """
    Tenant -> data source lookup backed by a tenants.json file.

    The file is re-read at most once per `ttl_seconds`.
    """

    def __init__(
        self,
        path: str | Path,
        ttl_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.path = Path(path)
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._cached: Optional[dict[str, TenantConfig]] = None
        self._cached_at = 0.0

    def _read(self) -> dict[str, TenantConfig]:
        if not self.path.exists():
            raise FileNotFoundError(f"Tenants file not found: {self.path}")
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {self.path}") from exc
        tenants = data.get("tenants") if isinstance(data, Mapping) else None
        if not isinstance(tenants, list):
            raise ValueError(
                "Invalid tenants file: expected { tenants: TenantConfig[] }"
            )
        return {t.id: t for t in (_parse_tenant(raw) for raw in tenants)}

    def tenants(self) -> dict[str, TenantConfig]:
        now = self._clock()
        if self._cached is None or now - self._cached_at > self.ttl_seconds:
            self._cached = self._read()
            self._cached_at = now
        return self._cached

    def get(self, tenant_id: str) -> TenantConfig:
        tenants = self.tenants()
        if tenant_id not in tenants:
            raise KeyError(f"Unknown tenant '{tenant_id}'")
        return tenants[tenant_id]

    def data_source_for(self, tenant_id: str) -> Optional[TimeOffDataSource]:
        """Build the data source configured for a tenant; None for kind "none"."""
        tenant = self.get(tenant_id)
        if tenant.kind == "mock":
            return MockDataSource(mock_config_from_mapping(tenant.options))
        if tenant.kind == "json":
            path = tenant.options.get("path")
            if not path:
                raise ValueError(f"Tenant '{tenant_id}': json connector needs 'path'.")
            # relative paths are resolved against the tenants file
            return JsonDataSource(self.path.parent / Path(path).expanduser())
        return None


def resolve_tenant_id(
    headers: Mapping[str, Any], query: Mapping[str, Any]
) -> Optional[str]:
    """
    Tenant id from the `x-tenant-id` header, falling back to the `tenant`
    query parameter. Blank values resolve to None.
    """
    lowered = {str(k).lower(): v for k, v in headers.items()}
    header = lowered.get("x-tenant-id")
    if isinstance(header, (list, tuple)):
        header = header[0] if header else None
    value = header if header is not None else query.get("tenant")
    if value is None:
        return None
    return str(value).strip() or None
