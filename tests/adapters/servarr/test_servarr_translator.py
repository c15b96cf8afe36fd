from __future__ import annotations

from availsync.adapters.servarr import SonarrSeries, to_fulfilled_series


def test_series_without_statistics_counts_no_files() -> None:
    series = SonarrSeries.model_validate(
        {"id": 4, "seasons": [{"seasonNumber": 1}]},
    )

    fulfilled = to_fulfilled_series(series)

    assert fulfilled.episode_file_count == 0
    assert fulfilled.season(1) is not None
    assert fulfilled.season(1).episode_file_count == 0  # type: ignore[union-attr]
