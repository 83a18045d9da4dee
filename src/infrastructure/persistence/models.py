"""
Modeles SQLModel pour la base de donnees EpiSync.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale. Les noms de colonnes reprennent les noms
des champs des entites, ce qui permet une conversion generique.

Tables:
- series: Series suivies (cle primaire = ID TVDB)
- seasons: Saisons, uniques par (series_id, season_number)
- episodes: Episodes, uniques par (series_id, season_number, episode_number)
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Index, SQLModel


def utcnow() -> datetime:
    """Horodatage UTC avec fuseau (les colonnes datetime l'exigent)."""
    return datetime.now(timezone.utc)


class SeriesModel(SQLModel, table=True):
    """
    Modele representant une serie suivie.

    L'ID n'est pas auto-incremente : c'est l'ID TVDB de la serie.
    """

    __tablename__ = "series"

    id: int | None = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": False},
    )
    title: str = Field(default="", index=True)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class SeasonModel(SQLModel, table=True):
    """
    Modele representant une saison de serie.

    Insere a la premiere synchronisation qui la reference, jamais modifie.
    """

    __tablename__ = "seasons"
    __table_args__ = (
        UniqueConstraint("series_id", "season_number", name="uq_seasons_series_number"),
    )

    id: int | None = Field(default=None, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True)
    season_id: int | None = Field(default=None, index=True)  # ID TVDB de la saison
    season_number: int
    created_at: datetime | None = Field(default_factory=utcnow)


class EpisodeModel(SQLModel, table=True):
    """
    Modele representant un episode de serie TV.

    episode_file_id vaut 0 tant qu'aucun fichier n'est associe.
    """

    __tablename__ = "episodes"
    __table_args__ = (
        UniqueConstraint(
            "series_id", "season_number", "episode_number",
            name="uq_episodes_natural_key",
        ),
        Index("ix_episodes_missing", "episode_file_id", "air_date"),
    )

    id: int | None = Field(default=None, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True)
    season_id: int | None = Field(default=None, index=True)
    season_number: int
    episode_number: int
    tvdb_episode_id: int | None = Field(default=None, index=True)
    air_date: date | None = None
    title: str = ""
    overview: str | None = None
    episode_file_id: int = Field(default=0)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)
