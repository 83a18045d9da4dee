"""
Route des épisodes manquants — liste paginée et triée.

Paramètres (noms attendus par le client pageable) :
- page : index de page (1 par défaut)
- pageSize : taille de page (configurable, 15 par défaut)
- sortKey : champ de tri (airDate par défaut)
- sortDir : asc ou desc (desc par défaut)
- includeSpecials : inclure la saison 0

Réponse : {"totalRecords": ..., "records": [...]} plus l'état de la page.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from ...core.value_objects.paging import PageRequest, SortDirection, SortKey
from ..deps import get_container
from .serializers import episode_to_json

router = APIRouter(prefix="/api")


@router.get("/missing")
async def missing_episodes(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1),
    sort_key: str = Query(SortKey.AIR_DATE.value, alias="sortKey"),
    sort_dir: str = Query(SortDirection.DESC.value, alias="sortDir"),
    include_specials: Optional[bool] = Query(None, alias="includeSpecials"),
):
    """Page d'épisodes diffusés sans fichier associé."""
    try:
        key = SortKey.from_wire(sort_key)
        direction = SortDirection.from_wire(sort_dir)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    container = get_container(request)
    settings = container.config()
    page_request = PageRequest(
        page=page,
        page_size=page_size or settings.missing_page_size,
        sort_key=key,
        sort_direction=direction,
        include_specials=(
            settings.include_specials if include_specials is None else include_specials
        ),
    )
    result = container.missing_episodes_query().get_missing_page(page_request)

    return {
        "page": result.page,
        "pageSize": result.page_size,
        "sortKey": result.sort_key.value,
        "sortDir": result.sort_direction.to_wire(),
        "totalRecords": result.total_records,
        "records": [
            episode_to_json(item.episode, item.series_title) for item in result.records
        ],
    }
