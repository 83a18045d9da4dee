"""
Client du catalogue externe pour la synchronisation des episodes.

Ce module fournit l'adaptateur TVDB qui implemente ICatalogSource
(defini dans core/ports/catalog.py).

Infrastructure partagee:
- APICache: Cache persistant des snapshots avec TTL configurable
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: Backoff exponentiel sur rate limiting
"""

from src.adapters.api.cache import APICache
from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.tvdb_client import TVDBClient

__all__ = [
    "APICache",
    "RateLimitError",
    "TVDBClient",
    "with_retry",
    "request_with_retry",
]
