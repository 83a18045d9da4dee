"""
Conversion des entités en JSON (noms de champs camelCase côté client).
"""

from typing import Any

from ...core.entities.media import Episode, Series
from ...services.episode_reconciler import ReconciliationSummary


def episode_to_json(episode: Episode, series_title: str = "") -> dict[str, Any]:
    return {
        "id": episode.id,
        "seriesId": episode.series_id,
        "seriesTitle": series_title,
        "seasonId": episode.season_id,
        "seasonNumber": episode.season_number,
        "episodeNumber": episode.episode_number,
        "tvDbEpisodeId": episode.tvdb_episode_id,
        "airDate": episode.air_date.isoformat() if episode.air_date else None,
        "title": episode.title,
        "overview": episode.overview,
        "episodeFileId": episode.episode_file_id,
    }


def series_to_json(series: Series) -> dict[str, Any]:
    return {"id": series.id, "title": series.title}


def summary_to_json(summary: ReconciliationSummary) -> dict[str, Any]:
    """Bilan de synchronisation, avec le détail des échecs."""
    return {
        "seriesId": summary.series_id,
        "seriesTitle": summary.series_title,
        "successCount": summary.success_count,
        "failureCount": summary.failure_count,
        "newCount": summary.new_count,
        "updatedCount": summary.updated_count,
        "failures": [
            {
                "tvDbEpisodeId": r.tvdb_episode_id,
                "seasonNumber": r.season_number,
                "episodeNumber": r.episode_number,
                "error": r.error,
            }
            for r in summary.failures
        ],
    }
