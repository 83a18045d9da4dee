"""
Tests du SQLModelRepository sur une base SQLite temporaire.

Verifie la conversion entite <-> modele, les filtres, les ecritures par
lots et la traduction des erreurs SQLAlchemy en StorageError.
"""

from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session

from src.core.entities.media import Episode, Season, Series
from src.core.ports.repositories import StorageError
from src.infrastructure.persistence.database import build_engine, init_db
from src.infrastructure.persistence.models import EpisodeModel, SeriesModel, utcnow
from src.infrastructure.persistence.repositories import SQLModelRepository


@pytest.fixture
def session(tmp_path: Path):
    """Session sur une base SQLite fraiche."""
    engine = build_engine(f"sqlite:///{tmp_path}/repo.db")
    init_db(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def repo(session: Session) -> SQLModelRepository:
    return SQLModelRepository(session)


def _episode(number: int, **kwargs) -> Episode:
    values = dict(
        series_id=100,
        season_id=501,
        season_number=1,
        episode_number=number,
        tvdb_episode_id=1000 + number,
        air_date=date(2020, 1, number),
        title=f"Episode {number}",
    )
    values.update(kwargs)
    return Episode(**values)


class TestReads:
    """Tests de lecture."""

    def test_get_absent(self, repo: SQLModelRepository) -> None:
        assert repo.get(Episode, 42) is None

    def test_add_and_get_round_trip(self, repo: SQLModelRepository) -> None:
        episode = _episode(1, overview="Pilot")

        episode_id = repo.add(episode)

        assert episode.id == episode_id
        stored = repo.get(Episode, episode_id)
        assert stored == episode
        assert stored.air_date == date(2020, 1, 1)

    def test_series_keeps_catalog_id(self, repo: SQLModelRepository) -> None:
        repo.add(Series(id=81189, title="Breaking Bad"))
        assert repo.get(Series, 81189).title == "Breaking Bad"

    def test_find_by_criteria(self, repo: SQLModelRepository) -> None:
        repo.add_many([_episode(1), _episode(2), _episode(1, series_id=200)])

        found = repo.find_one(Episode, series_id=100, season_number=1, episode_number=2)
        many = repo.find_many(Episode, series_id=100)

        assert found.tvdb_episode_id == 1002
        assert [e.episode_number for e in many] == [1, 2]

    def test_find_with_predicate(self, repo: SQLModelRepository) -> None:
        repo.add_many([_episode(1), _episode(2, episode_file_id=5), _episode(3)])

        found = repo.find_many(Episode, lambda e: e.episode_number > 1, episode_file_id=0)

        assert [e.episode_number for e in found] == [3]
        assert repo.find_one(Episode, lambda e: e.title == "absent") is None

    def test_unsupported_type(self, repo: SQLModelRepository) -> None:
        with pytest.raises(TypeError):
            repo.all(dict)


class TestWrites:
    """Tests d'ecriture."""

    def test_add_many_assigns_ids(self, repo: SQLModelRepository) -> None:
        episodes = [_episode(1), _episode(2)]

        repo.add_many(episodes)

        assert all(e.id is not None for e in episodes)
        assert len(repo.all(Episode)) == 2

    def test_add_many_empty_is_noop(self, repo: SQLModelRepository) -> None:
        repo.add_many([])
        assert repo.all(Episode) == []

    def test_unique_natural_key(self, repo: SQLModelRepository) -> None:
        """Deux episodes avec la meme cle naturelle sont refuses en bloc."""
        repo.add(_episode(1))

        with pytest.raises(StorageError):
            repo.add_many([_episode(2), _episode(1, tvdb_episode_id=9)])

        assert [e.episode_number for e in repo.all(Episode)] == [1]

    def test_unique_season(self, repo: SQLModelRepository) -> None:
        repo.add(Season(series_id=100, season_id=501, season_number=1))
        with pytest.raises(StorageError):
            repo.add(Season(series_id=100, season_id=502, season_number=1))

    def test_update_many(self, repo: SQLModelRepository, session: Session) -> None:
        episodes = [_episode(1), _episode(2)]
        repo.add_many(episodes)
        for episode in episodes:
            episode.title = episode.title.upper()

        repo.update_many(episodes)

        assert [e.title for e in repo.all(Episode)] == ["EPISODE 1", "EPISODE 2"]
        model = session.get(EpisodeModel, episodes[0].id)
        assert model.updated_at >= model.created_at

    def test_timestamps_are_timezone_aware(self, repo: SQLModelRepository, session: Session) -> None:
        """Les horodatages portent un fuseau, sinon SQLModel refuse l'ecriture."""
        assert utcnow().tzinfo is not None
        assert SeriesModel(id=1, title="x").created_at.tzinfo is not None

        repo.add(Series(id=100, title="Test Show"))
        episode_id = repo.add(_episode(1))
        episode = repo.get(Episode, episode_id)
        episode.title = "Renamed"
        repo.update(episode)

        assert repo.get(Series, 100).title == "Test Show"
        assert session.get(EpisodeModel, episode_id).title == "Renamed"

    def test_update_missing_raises(self, repo: SQLModelRepository) -> None:
        with pytest.raises(StorageError):
            repo.update(_episode(1, id=999))

    def test_delete_by_id(self, repo: SQLModelRepository) -> None:
        episode_id = repo.add(_episode(1))

        repo.delete_by_id(Episode, episode_id)
        repo.delete_by_id(Episode, episode_id)

        assert repo.get(Episode, episode_id) is None
