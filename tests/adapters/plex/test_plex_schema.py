from __future__ import annotations

from availsync.adapters.plex import PlexResponse, to_media_server_item
from availsync.domain.ports import MediaServerItem


def test_response_parses_metadata_and_ignores_extra_fields() -> None:
    payload = {
        "MediaContainer": {
            "size": 1,
            "librarySectionID": 3,
            "Metadata": [
                {
                    "ratingKey": "100",
                    "parentRatingKey": "99",
                    "title": "Season 2",
                    "index": 2,
                    "type": "season",
                    "leafCount": 10,
                }
            ],
        }
    }

    container = PlexResponse.model_validate(payload).media_container

    metadata = container.metadata[0]
    assert to_media_server_item(metadata) == MediaServerItem(
        rating_key="100", title="Season 2", index=2
    )


def test_container_without_metadata_is_empty() -> None:
    container = PlexResponse.model_validate({"MediaContainer": {"size": 0}}).media_container

    assert container.metadata == []
