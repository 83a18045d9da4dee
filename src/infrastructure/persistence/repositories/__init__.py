"""
Implementations du repository generique.

Ce module contient les implementations concretes de l'interface IRepository
definie dans src/core/ports/repositories.py :

- SQLModelRepository : persistance SQLite via SQLModel, recoit une session
  par injection de dependances et convertit entre entites de domaine
  (dataclass) et modeles DB (SQLModel)
- InMemoryRepository : stockage en memoire (tests, essais sans base)
"""

from src.infrastructure.persistence.repositories.memory_repository import (
    InMemoryRepository,
)
from src.infrastructure.persistence.repositories.sqlmodel_repository import (
    SQLModelRepository,
)

__all__ = [
    "InMemoryRepository",
    "SQLModelRepository",
]
