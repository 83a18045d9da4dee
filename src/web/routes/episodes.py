"""
Routes des épisodes — consultation et suppression explicite par ID local.
"""

from fastapi import APIRouter, HTTPException, Request, Response

from ..deps import get_container
from .serializers import episode_to_json

router = APIRouter(prefix="/api")


@router.get("/series/{series_id}/episodes")
async def series_episodes(request: Request, series_id: int):
    service = get_container(request).episode_service()
    return [episode_to_json(e) for e in service.get_episodes_by_series(series_id)]


@router.get("/episodes/{episode_id}")
async def get_episode(request: Request, episode_id: int):
    episode = get_container(request).episode_service().get_episode(episode_id)
    if episode is None:
        raise HTTPException(status_code=404, detail=f"Episode not found: {episode_id}")
    return episode_to_json(episode)


@router.delete("/episodes/{episode_id}", status_code=204)
async def delete_episode(request: Request, episode_id: int):
    """Supprime un épisode (jamais fait par la synchronisation)."""
    service = get_container(request).episode_service()
    if service.get_episode(episode_id) is None:
        raise HTTPException(status_code=404, detail=f"Episode not found: {episode_id}")
    service.delete_episode(episode_id)
    return Response(status_code=204)
