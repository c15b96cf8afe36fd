from __future__ import annotations

import json

import pytest

from availsync.config import (
    DEFAULT_PAGE_SIZE,
    ConfigurationError,
    InvalidServerDefinitionError,
    MissingConfigurationError,
    get_media_server_config,
    get_page_size,
    get_radarr_servers,
    get_sonarr_servers,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_media_server_config_sets_token_header(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLEX_URL", "http://plex:32400/")
    monkeypatch.setenv("PLEX_TOKEN", "token")

    config = get_media_server_config()

    assert config.base_url == "http://plex:32400"
    assert config.resilience.base_url == "http://plex:32400"
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["X-Plex-Token"] == "token"
    assert config.resilience.retry.total == 0


def test_media_server_config_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLEX_URL", "http://plex:32400")
    monkeypatch.delenv("PLEX_TOKEN", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_media_server_config()


def test_unset_server_lists_mean_no_servers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RADARR_SERVERS", raising=False)
    monkeypatch.delenv("SONARR_SERVERS", raising=False)

    assert get_radarr_servers() == ()
    assert get_sonarr_servers() == ()


def test_server_list_is_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(
        "RADARR_SERVERS",
        json.dumps(
            [
                {"id": 1, "name": "Radarr", "api_key": "a", "base_url": "http://radarr:7878"},
                {
                    "id": "2",
                    "api_key": "b",
                    "base_url": "http://radarr4k:7878/",
                    "is_4k": True,
                    "sync_enabled": False,
                },
            ]
        ),
    )

    first, second = get_radarr_servers()

    assert (first.id, first.name, first.is_4k, first.sync_enabled) == (1, "Radarr", False, True)
    assert first.api_url == "http://radarr:7878/api/v3"
    assert (second.id, second.is_4k, second.sync_enabled) == (2, True, False)
    assert second.name == "radarr_servers-2"
    resilience = second.resilience(kind="radarr")
    assert resilience.name == "radarr:2"
    assert resilience.base_url == "http://radarr4k:7878/api/v3"
    assert resilience.default_headers is not None
    assert resilience.default_headers["X-Api-Key"] == "b"


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"id": 1}),
        json.dumps(["nope"]),
        json.dumps([{"id": 1, "api_key": "a"}]),
        json.dumps([{"id": "x", "api_key": "a", "base_url": "http://s"}]),
    ],
)
def test_invalid_server_lists_are_rejected(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("SONARR_SERVERS", raw)

    with pytest.raises(InvalidServerDefinitionError) as exc:
        get_sonarr_servers()

    assert exc.value.variable == "SONARR_SERVERS"


def test_page_size_defaults_and_validates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AVAILSYNC_PAGE_SIZE", raising=False)
    assert get_page_size() == DEFAULT_PAGE_SIZE

    monkeypatch.setenv("AVAILSYNC_PAGE_SIZE", "25")
    assert get_page_size() == 25

    monkeypatch.setenv("AVAILSYNC_PAGE_SIZE", "0")
    with pytest.raises(ConfigurationError):
        get_page_size()
