"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- Series: Tracked TV series (identified by its TVDB id)
- Season: Season of a series, registered on first sync
- Episode: Individual episode of a series
"""

from src.core.entities.media import Episode, Season, Series

__all__ = [
    "Series",
    "Season",
    "Episode",
]
