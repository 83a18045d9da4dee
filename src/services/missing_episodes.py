"""
Requete des episodes manquants et pagination.

Un episode est manquant quand aucun fichier ne lui est associe
(episode_file_id == 0) et qu'il a deja ete diffuse. La saison 0
(speciaux, bonus) est exclue sauf demande explicite.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from src.core.entities.media import Episode, Series
from src.core.ports.repositories import IRepository
from src.core.value_objects.paging import MAX_PAGE_SIZE, Page, PageRequest, SortKey


@dataclass(frozen=True)
class MissingEpisode:
    """Episode manquant accompagne du titre de sa serie."""

    episode: Episode
    series_title: str = ""


def _natural_order(item: MissingEpisode) -> tuple:
    ep = item.episode
    return (ep.series_id or 0, ep.season_number, ep.episode_number)


_SORT_FIELDS: dict[SortKey, Callable[[MissingEpisode], tuple]] = {
    SortKey.AIR_DATE: lambda m: (m.episode.air_date or date.min,),
    SortKey.SERIES_TITLE: lambda m: (m.series_title.lower(),),
    SortKey.SEASON_NUMBER: lambda m: (m.episode.season_number,),
    SortKey.EPISODE_NUMBER: lambda m: (m.episode.episode_number,),
    SortKey.TITLE: lambda m: (m.episode.title.lower(),),
}


class MissingEpisodesQuery:
    """Lecture seule des episodes sans fichier."""

    def __init__(
        self,
        repository: IRepository,
        today: Callable[[], date] = date.today,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._repository = repository
        self._today = today
        self._max_page_size = max_page_size

    def episodes_without_files(
        self,
        include_specials: bool,
        today: Optional[date] = None,
    ) -> list[Episode]:
        """
        Liste les episodes diffuses sans fichier associe.

        Args:
            include_specials: Inclure la saison 0
            today: Date de reference (defaut: aujourd'hui)

        Returns:
            Episodes tries par date de diffusion puis par cle naturelle
        """
        cutoff = today or self._today()

        def is_missing(episode: Episode) -> bool:
            if episode.air_date is None or episode.air_date > cutoff:
                return False
            return include_specials or episode.season_number > 0

        episodes = self._repository.find_many(Episode, is_missing, episode_file_id=0)
        return sorted(
            episodes,
            key=lambda e: (e.air_date, e.series_id or 0, e.season_number, e.episode_number),
        )

    def get_missing_page(self, request: PageRequest, today: Optional[date] = None) -> Page:
        """
        Retourne une page triee des episodes manquants.

        Le total est calcule sur l'ensemble filtre, avant decoupage.
        Une page au-dela de la derniere est vide.
        """
        request = request.bounded(self._max_page_size)
        episodes = self.episodes_without_files(request.include_specials, today)

        titles = self._series_titles({e.series_id for e in episodes})
        items = [MissingEpisode(e, titles.get(e.series_id, "")) for e in episodes]

        sort_field = _SORT_FIELDS[request.sort_key]
        # Tri stable : cle naturelle d'abord, puis champ demande
        items.sort(key=_natural_order)
        items.sort(key=sort_field, reverse=request.sort_direction.descending)

        start = request.offset
        return Page(
            page=request.page,
            page_size=request.page_size,
            sort_key=request.sort_key,
            sort_direction=request.sort_direction,
            total_records=len(items),
            records=items[start:start + request.page_size],
        )

    def _series_titles(self, series_ids: set) -> dict[int, str]:
        if not series_ids:
            return {}
        return {
            s.id: s.title
            for s in self._repository.find_many(Series, lambda s: s.id in series_ids)
        }
