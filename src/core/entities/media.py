"""
Episodic metadata entities.

Entities representing tracked TV series, their seasons and their episodes,
synchronized from the external catalog (TVDB) into the local store.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Series:
    """
    Tracked TV series.

    The identifier is the stable TVDB series id, so it is known before the
    series is stored and never generated locally.

    Attributes:
        id: TheTVDB series ID
        title: Series name as returned by the catalog
    """

    id: Optional[int] = None
    title: str = ""


@dataclass
class Season:
    """
    Season of a tracked series.

    Unique per (series_id, season_number). The season_id is the catalog's
    own season identifier and is distinct from the display ordinal.

    Attributes:
        id: Internal database ID
        series_id: Reference to parent Series
        season_id: TheTVDB season ID
        season_number: Season ordinal (0 holds specials)
    """

    id: Optional[int] = None
    series_id: Optional[int] = None
    season_id: Optional[int] = None
    season_number: int = 0


@dataclass
class Episode:
    """
    Individual episode of a TV series.

    Matched against catalog snapshots by its natural key
    (series_id, season_number, episode_number).

    Attributes:
        id: Internal database ID
        series_id: Reference to parent Series
        season_id: TheTVDB season ID
        season_number: Season number (0 holds specials)
        episode_number: Episode number within season
        tvdb_episode_id: TheTVDB episode ID (provenance only)
        air_date: Original air date (no time component)
        title: Episode title
        overview: Episode description
        episode_file_id: Linked media file, 0 when none
    """

    id: Optional[int] = None
    series_id: Optional[int] = None
    season_id: Optional[int] = None
    season_number: int = 0
    episode_number: int = 0
    tvdb_episode_id: Optional[int] = None
    air_date: Optional[date] = None
    title: str = ""
    overview: Optional[str] = None
    episode_file_id: int = 0

    @property
    def natural_key(self) -> tuple[Optional[int], int, int]:
        """Return the (series_id, season_number, episode_number) key."""
        return (self.series_id, self.season_number, self.episode_number)

    @property
    def has_file(self) -> bool:
        """Check whether a media file is linked to the episode."""
        return bool(self.episode_file_id)
