"""
Implementation SQLModel du repository generique.

Implemente l'interface IRepository pour la persistance des series, saisons
et episodes dans la base de donnees SQLite via SQLModel.

Les criteres d'egalite sont traduits en clause WHERE ; le predicat optionnel
est applique ensuite cote Python sur les entites converties.
"""

from collections.abc import Iterable
from dataclasses import fields
from typing import Any, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from src.core.entities.media import Episode, Season, Series
from src.core.ports.repositories import IRepository, Predicate, StorageError
from src.infrastructure.persistence.models import (
    EpisodeModel,
    SeasonModel,
    SeriesModel,
    utcnow,
)

T = TypeVar("T")

# Entite domaine -> table
_MODELS: dict[type, type[SQLModel]] = {
    Series: SeriesModel,
    Season: SeasonModel,
    Episode: EpisodeModel,
}


class SQLModelRepository(IRepository):
    """
    Repository SQLModel generique.

    Implemente IRepository avec conversion bidirectionnelle entre les
    entites (dataclass du domaine) et les modeles (tables SQLModel).
    Chaque operation d'ecriture fait un seul commit ; en cas d'erreur la
    session est annulee et une StorageError est levee.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    @staticmethod
    def _model_for(entity_type: type) -> type[SQLModel]:
        try:
            return _MODELS[entity_type]
        except KeyError:
            raise TypeError(f"Unsupported entity type: {entity_type.__name__}") from None

    def _to_entity(self, entity_type: type[T], model: SQLModel) -> T:
        """Convertit un modele DB en entite domaine."""
        return entity_type(
            **{f.name: getattr(model, f.name) for f in fields(entity_type)}
        )

    def _to_model(self, entity: Any) -> SQLModel:
        """Convertit une entite domaine en modele DB (id conserve si defini)."""
        model_cls = self._model_for(type(entity))
        values = {f.name: getattr(entity, f.name) for f in fields(entity)}
        if values.get("id") is None:
            values.pop("id", None)
        return model_cls(**values)

    def _copy_to_model(self, entity: Any, model: SQLModel) -> None:
        """Recopie les champs de l'entite sur un modele existant."""
        for f in fields(entity):
            if f.name != "id":
                setattr(model, f.name, getattr(entity, f.name))
        if hasattr(model, "updated_at"):
            model.updated_at = utcnow()

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise StorageError(str(e)) from e

    def get(self, entity_type: type[T], entity_id: int) -> Optional[T]:
        """Recupere une entite par son ID interne."""
        model_cls = self._model_for(entity_type)
        try:
            model = self._session.get(model_cls, int(entity_id))
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        if model:
            return self._to_entity(entity_type, model)
        return None

    def find_one(
        self,
        entity_type: type[T],
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> Optional[T]:
        """Recupere la premiere entite correspondant aux filtres."""
        if predicate is None:
            statement = self._select(entity_type, criteria)
            try:
                model = self._session.exec(statement).first()
            except SQLAlchemyError as e:
                raise StorageError(str(e)) from e
            return self._to_entity(entity_type, model) if model else None

        matches = self.find_many(entity_type, predicate, **criteria)
        return matches[0] if matches else None

    def find_many(
        self,
        entity_type: type[T],
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> list[T]:
        """Liste les entites correspondant aux filtres."""
        statement = self._select(entity_type, criteria)
        try:
            models = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        entities = [self._to_entity(entity_type, model) for model in models]
        if predicate is not None:
            entities = [entity for entity in entities if predicate(entity)]
        return entities

    def all(self, entity_type: type[T]) -> list[T]:
        """Liste toutes les entites d'un type."""
        return self.find_many(entity_type)

    def _select(self, entity_type: type, criteria: dict[str, Any]):
        model_cls = self._model_for(entity_type)
        statement = select(model_cls)
        for name, value in criteria.items():
            column = getattr(model_cls, name)
            statement = statement.where(column == value)
        return statement.order_by(model_cls.id)

    def add(self, entity: Any) -> int:
        """Insere une entite et retourne son ID."""
        model = self._to_model(entity)
        self._session.add(model)
        self._commit()
        self._session.refresh(model)
        entity.id = model.id
        return model.id

    def add_many(self, entities: Iterable[Any]) -> None:
        """Insere plusieurs entites en une seule transaction."""
        pairs = [(entity, self._to_model(entity)) for entity in entities]
        if not pairs:
            return
        self._session.add_all([model for _, model in pairs])
        self._commit()
        for entity, model in pairs:
            entity.id = model.id

    def update(self, entity: Any) -> None:
        """Met a jour une entite existante."""
        self.update_many([entity])

    def update_many(self, entities: Iterable[Any]) -> None:
        """Met a jour plusieurs entites en une seule transaction."""
        pending = list(entities)
        if not pending:
            return
        for entity in pending:
            model_cls = self._model_for(type(entity))
            existing = self._session.get(model_cls, entity.id) if entity.id is not None else None
            if existing is None:
                self._session.rollback()
                raise StorageError(
                    f"{type(entity).__name__} {entity.id} does not exist"
                )
            self._copy_to_model(entity, existing)
            self._session.add(existing)
        self._commit()

    def delete_by_id(self, entity_type: type[T], entity_id: int) -> None:
        """Supprime une entite par son ID (sans effet si absente)."""
        model = self._session.get(self._model_for(entity_type), int(entity_id))
        if model is None:
            return
        self._session.delete(model)
        self._commit()
