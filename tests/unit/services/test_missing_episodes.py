"""
Tests de la requete des episodes manquants.

Un episode est manquant s'il est diffuse (date <= aujourd'hui) et sans
fichier. La saison 0 est exclue par defaut.
"""

from datetime import date

import pytest

from src.core.entities.media import Episode, Series
from src.core.value_objects.paging import PageRequest, SortDirection, SortKey
from src.infrastructure.persistence.repositories import InMemoryRepository
from src.services.missing_episodes import MissingEpisodesQuery

TODAY = date(2024, 6, 1)


def _episode(series_id: int, season: int, number: int, aired: date, **kwargs) -> Episode:
    return Episode(
        series_id=series_id,
        season_id=500 + season,
        season_number=season,
        episode_number=number,
        air_date=aired,
        title=kwargs.pop("title", f"S{season}E{number}"),
        **kwargs,
    )


@pytest.fixture
def populated(repository: InMemoryRepository) -> InMemoryRepository:
    """
    Deux series, un mix d'episodes manquants, possedes, futurs et speciaux.

    Manquants (hors speciaux) : Alpha S1E1, S1E2, Beta S1E1.
    """
    repository.add(Series(id=100, title="Beta"))
    repository.add(Series(id=200, title="Alpha"))
    repository.add_many([
        _episode(200, 1, 1, date(2020, 1, 1), title="Pilot"),
        _episode(200, 1, 2, date(2020, 1, 8), title="Second"),
        _episode(200, 1, 3, date(2020, 1, 15), episode_file_id=9),
        _episode(200, 0, 1, date(2019, 12, 25), title="Christmas"),
        _episode(100, 1, 1, date(2021, 3, 1), title="Arrival"),
        _episode(100, 1, 2, date(2030, 1, 1)),
    ])
    return repository


@pytest.fixture
def query(populated: InMemoryRepository) -> MissingEpisodesQuery:
    return MissingEpisodesQuery(populated, today=lambda: TODAY)


class TestEpisodesWithoutFiles:
    """Tests du filtre des episodes manquants."""

    def test_excludes_specials_files_and_future(self, query: MissingEpisodesQuery) -> None:
        episodes = query.episodes_without_files(include_specials=False)

        assert [(e.series_id, e.season_number, e.episode_number) for e in episodes] == [
            (200, 1, 1),
            (200, 1, 2),
            (100, 1, 1),
        ]

    def test_includes_specials_on_request(self, query: MissingEpisodesQuery) -> None:
        episodes = query.episodes_without_files(include_specials=True)

        assert len(episodes) == 4
        assert episodes[0].season_number == 0

    def test_today_override(self, query: MissingEpisodesQuery) -> None:
        """Avec une date de reference future, l'episode de 2030 est manquant."""
        episodes = query.episodes_without_files(False, today=date(2030, 1, 1))
        assert len(episodes) == 4

    def test_air_date_today_counts_as_aired(self, repository: InMemoryRepository) -> None:
        repository.add(_episode(100, 1, 1, TODAY))
        query = MissingEpisodesQuery(repository, today=lambda: TODAY)

        assert len(query.episodes_without_files(False)) == 1

    def test_empty_store(self, repository: InMemoryRepository) -> None:
        assert MissingEpisodesQuery(repository).episodes_without_files(True) == []


class TestGetMissingPage:
    """Tests de la pagination et du tri."""

    def test_default_sort_is_air_date_descending(self, query: MissingEpisodesQuery) -> None:
        page = query.get_missing_page(PageRequest())

        assert page.total_records == 3
        assert [m.episode.title for m in page.records] == ["Arrival", "Second", "Pilot"]
        assert page.sort_direction is SortDirection.DESC

    def test_series_titles_are_attached(self, query: MissingEpisodesQuery) -> None:
        page = query.get_missing_page(PageRequest())

        assert {m.series_title for m in page.records} == {"Alpha", "Beta"}

    def test_sort_by_series_title_ascending(self, query: MissingEpisodesQuery) -> None:
        page = query.get_missing_page(
            PageRequest(sort_key=SortKey.SERIES_TITLE, sort_direction=SortDirection.ASC)
        )

        assert [m.series_title for m in page.records] == ["Alpha", "Alpha", "Beta"]
        # Egalite de titre : ordre naturel (saison, episode)
        assert [m.episode.episode_number for m in page.records[:2]] == [1, 2]

    def test_sort_by_title(self, query: MissingEpisodesQuery) -> None:
        page = query.get_missing_page(
            PageRequest(sort_key=SortKey.TITLE, sort_direction=SortDirection.ASC)
        )
        assert [m.episode.title for m in page.records] == ["Arrival", "Pilot", "Second"]

    def test_pages_slice_and_total(self, query: MissingEpisodesQuery) -> None:
        """Le total porte sur l'ensemble filtre, pas sur la tranche."""
        first = query.get_missing_page(PageRequest(page=1, page_size=2))
        second = query.get_missing_page(PageRequest(page=2, page_size=2))

        assert len(first.records) == 2
        assert len(second.records) == 1
        assert first.total_records == second.total_records == 3
        assert first.total_pages == 2

    def test_page_past_the_end_is_empty(self, query: MissingEpisodesQuery) -> None:
        page = query.get_missing_page(PageRequest(page=10, page_size=15))

        assert page.records == []
        assert page.total_records == 3
        assert page.page == 10

    def test_page_size_is_bounded(self, populated: InMemoryRepository) -> None:
        query = MissingEpisodesQuery(populated, today=lambda: TODAY, max_page_size=2)

        page = query.get_missing_page(PageRequest(page_size=100))

        assert page.page_size == 2
        assert len(page.records) == 2

    def test_include_specials_in_page(self, query: MissingEpisodesQuery) -> None:
        page = query.get_missing_page(PageRequest(include_specials=True))
        assert page.total_records == 4
