"""
Mecanisme de retry avec backoff exponentiel pour le catalogue TVDB.

Relance automatiquement les requetes en cas de rate limiting (429) ou
d'erreur de transport (connexion refusee, timeout), avec un delai croissant
et du jitter aleatoire. Les autres erreurs HTTP sont propagees immediatement.

Usage:
    @with_retry(max_attempts=5, max_wait=60)
    async def my_api_call():
        ...

    response = await request_with_retry(client, "GET", "/series/81189")
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (RateLimitError, httpx.TransportError)


def _log_retry(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome else None
    logger.debug(
        f"Nouvelle tentative ({state.attempt_number}) apres erreur: {error!r}",
    )


def with_retry(
    max_attempts: int = 5,
    max_wait: int = 60,
    retry_on: tuple[type[BaseException], ...] = RETRYABLE_ERRORS,
):
    """
    Decorateur pour relancer sur erreur transitoire avec backoff exponentiel.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)
        retry_on: Types d'exception declenchant une nouvelle tentative

    Returns:
        Decorateur a appliquer sur une fonction async. La derniere exception
        est relancee telle quelle apres epuisement des tentatives.
    """
    return retry(
        retry=retry_if_exception_type(retry_on),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique.

    Convertit les reponses 429 en RateLimitError. Les autres erreurs HTTP
    (4xx, 5xx) sont levees via raise_for_status() sans retry.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre tentatives en secondes
        **kwargs: Arguments supplementaires passes a client.request()

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.TransportError: Si le serveur reste injoignable
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            retry_after_header = response.headers.get("Retry-After")
            retry_after = int(retry_after_header) if retry_after_header else None
            raise RateLimitError(retry_after)
        response.raise_for_status()
        return response

    return await _do_request()
