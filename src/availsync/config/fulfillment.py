"""Fulfillment server (Radarr/Sonarr style) configuration values.

Server lists are read from JSON arrays in ``RADARR_SERVERS`` and
``SONARR_SERVERS``. Each entry looks like::

    {"id": 1, "name": "Radarr 4K", "api_key": "...", "base_url": "http://radarr:7878",
     "is_4k": true, "sync_enabled": true}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, cast

from .env import optional_env_var
from .errors import InvalidServerDefinitionError
from .http_resilience import RateLimit, ResilienceConfig

SERVARR_API_PATH = "/api/v3"
SERVARR_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class FulfillmentServerConfig:
    id: int
    name: str
    api_key: str
    base_url: str
    is_4k: bool = False
    sync_enabled: bool = True

    @property
    def api_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{SERVARR_API_PATH}"

    def resilience(self, *, kind: str) -> ResilienceConfig:
        return ResilienceConfig(
            name=f"{kind}:{self.id}",
            base_url=self.api_url,
            timeout_seconds=SERVARR_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"Accept": "application/json", "X-Api-Key": self.api_key},
        )


def _parse_entry(variable: str, position: int, raw: object) -> FulfillmentServerConfig:
    if not isinstance(raw, dict):
        raise InvalidServerDefinitionError(variable, f"entry {position} is not an object")
    entry = cast("dict[str, Any]", raw)
    missing = [key for key in ("id", "api_key", "base_url") if key not in entry]
    if missing:
        raise InvalidServerDefinitionError(
            variable, f"entry {position} is missing {', '.join(missing)}"
        )
    try:
        server_id = int(entry["id"])
    except (TypeError, ValueError) as exc:
        raise InvalidServerDefinitionError(variable, f"entry {position} has a bad id") from exc
    return FulfillmentServerConfig(
        id=server_id,
        name=str(entry.get("name") or f"{variable.lower()}-{server_id}"),
        api_key=str(entry["api_key"]),
        base_url=str(entry["base_url"]),
        is_4k=bool(entry.get("is_4k", False)),
        sync_enabled=bool(entry.get("sync_enabled", True)),
    )


def load_servers(variable: str) -> tuple[FulfillmentServerConfig, ...]:
    """Parse the server list stored in ``variable``; unset means no servers."""

    raw = optional_env_var(variable)
    if raw is None:
        return ()
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidServerDefinitionError(variable, "value is not valid JSON") from exc
    if not isinstance(document, list):
        raise InvalidServerDefinitionError(variable, "value must be a JSON array")
    entries = cast("list[object]", document)
    return tuple(_parse_entry(variable, index, item) for index, item in enumerate(entries))


def get_radarr_servers() -> tuple[FulfillmentServerConfig, ...]:
    return load_servers("RADARR_SERVERS")


def get_sonarr_servers() -> tuple[FulfillmentServerConfig, ...]:
    return load_servers("SONARR_SERVERS")
