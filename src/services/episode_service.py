"""
Service d'acces aux episodes stockes.

Recherches par ID, par cle naturelle, par date de diffusion, par serie ou
par saison, et operations explicites d'ajout, mise a jour et suppression.
La suppression n'est jamais declenchee par la synchronisation.
"""

from datetime import date, datetime
from typing import Optional

from src.core.entities.media import Episode
from src.core.ports.repositories import IRepository


class EpisodeService:
    """Operations unitaires sur les episodes."""

    def __init__(self, repository: IRepository) -> None:
        self._repository = repository

    def add_episode(self, episode: Episode) -> int:
        """Insere un episode et retourne son ID."""
        return self._repository.add(episode)

    def get_episode(self, episode_id: int) -> Optional[Episode]:
        return self._repository.get(Episode, episode_id)

    def get_episode_by_number(
        self,
        series_id: int,
        season_number: int,
        episode_number: int,
    ) -> Optional[Episode]:
        """Recupere un episode par sa cle naturelle."""
        return self._repository.find_one(
            Episode,
            series_id=series_id,
            season_number=season_number,
            episode_number=episode_number,
        )

    def get_episode_by_air_date(self, series_id: int, air_date: date) -> Optional[Episode]:
        """
        Recupere l'episode d'une serie diffuse a une date donnee.

        Seule la partie date est comparee (pour les series quotidiennes).
        """
        if isinstance(air_date, datetime):
            air_date = air_date.date()
        return self._repository.find_one(Episode, series_id=series_id, air_date=air_date)

    def get_episodes_by_series(self, series_id: int) -> list[Episode]:
        episodes = self._repository.find_many(Episode, series_id=series_id)
        return sorted(episodes, key=lambda e: (e.season_number, e.episode_number))

    def get_episodes_by_season(self, season_id: int) -> list[Episode]:
        """Liste les episodes d'une saison (ID catalogue de la saison)."""
        episodes = self._repository.find_many(Episode, season_id=season_id)
        return sorted(episodes, key=lambda e: e.episode_number)

    def update_episode(self, episode: Episode) -> None:
        self._repository.update(episode)

    def delete_episode(self, episode_id: int) -> None:
        self._repository.delete_by_id(Episode, episode_id)
