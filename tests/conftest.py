"""
Fixtures pytest partagees pour les tests EpiSync.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Repository en memoire
- Source catalogue factice (snapshots construits en memoire)
"""

from pathlib import Path

import pytest

from src.config import Settings
from src.core.entities.media import Series
from src.infrastructure.persistence.repositories import InMemoryRepository
from tests.fixtures.catalog import FakeCatalog


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base, le cache et les logs.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        tvdb_api_key="test-api-key",
        catalog_cache_dir=tmp_path / "cache",
        catalog_cache_ttl=0,
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def repository() -> InMemoryRepository:
    """Repository en memoire vide."""
    return InMemoryRepository()


@pytest.fixture
def catalog() -> FakeCatalog:
    """Source catalogue factice vide."""
    return FakeCatalog()


@pytest.fixture
def series() -> Series:
    """Serie suivie de reference (ID catalogue 100)."""
    return Series(id=100, title="Test Show")
