"""
Routes des séries suivies — ajout et synchronisation depuis TVDB.
"""

from fastapi import APIRouter, HTTPException, Query, Request

from ...core.ports.catalog import SeriesNotFoundError, SourceUnavailableError
from ...core.ports.repositories import StorageError
from ..deps import get_container
from .serializers import series_to_json, summary_to_json

router = APIRouter(prefix="/api/series")


@router.get("")
async def list_series(request: Request):
    service = get_container(request).series_service()
    return [series_to_json(s) for s in service.list_series()]


@router.post("/{series_id}", status_code=201)
async def add_series(request: Request, series_id: int):
    """Suit une nouvelle série (idempotent)."""
    service = get_container(request).series_service()
    try:
        series = await service.add_series(series_id)
    except SeriesNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SourceUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return series_to_json(series)


@router.post("/{series_id}/refresh")
async def refresh_series(request: Request, series_id: int, force: bool = Query(False)):
    """Synchronise les épisodes d'une série et retourne le bilan (force : ignore le cache)."""
    service = get_container(request).series_service()
    try:
        summary = await service.refresh_series(series_id, force=force)
    except SeriesNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SourceUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return summary_to_json(summary)
