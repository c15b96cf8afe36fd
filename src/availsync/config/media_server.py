"""Media server (Plex) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

PLEX_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class MediaServerConfig:
    """Holds the media server address and token."""

    base_url: str
    token: str
    resilience: ResilienceConfig


def get_media_server_config(*, resilience: ResilienceConfig | None = None) -> MediaServerConfig:
    values = require_env_vars(("PLEX_URL", "PLEX_TOKEN"))
    base_url = values["PLEX_URL"].rstrip("/")
    return MediaServerConfig(
        base_url=base_url,
        token=values["PLEX_TOKEN"],
        resilience=resilience
        or ResilienceConfig(
            name="plex",
            base_url=base_url,
            timeout_seconds=PLEX_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            default_headers={
                "Accept": "application/json",
                "X-Plex-Token": values["PLEX_TOKEN"],
            },
        ),
    )
