"""Endpoints de la programación de fútbol en TV"""
from functools import lru_cache
from typing import Dict, List
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from tvmatch.api.deps import schedule_cache
from tvmatch.core.cache import ScheduleCache, ScheduleSnapshot
from tvmatch.core.config import get_settings
from tvmatch.core.errors import ScheduleRefreshError, ScheduleUnavailableError
from tvmatch.schemas.schedule import Match, RefreshResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Schedule"])


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


@lru_cache
def get_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=get_settings().TEMPLATES_DIR)


def current_snapshot(cache: ScheduleCache) -> ScheduleSnapshot:
    """Snapshot vigente (refresca si venció); 502 si no hay nada que servir"""
    try:
        snapshot = cache.get_schedule()
    except ScheduleUnavailableError as e:
        logger.error(f"Programación no disponible: {e}")
        raise HTTPException(502, str(e))

    if snapshot.error:
        logger.warning(f"Sirviendo programación vieja ({snapshot.last_refresh}): {snapshot.error}")
    return snapshot


# Los endpoints son `def` para que FastAPI los ejecute en el threadpool:
# la descarga remota es bloqueante.

@router.get(
    "/schedule.json",
    response_model=Dict[str, List[Match]],
    response_class=UTF8JSONResponse,
)
def get_schedule_json(cache: ScheduleCache = Depends(schedule_cache)):
    """
    Programación completa en JSON.

    - **Claves**: "YYYY-MM-DD - Dagnamn"
    - **Valores**: lista de partidos {Name, League, Channel, Time}
    - **Caché**: se refresca como mucho cada CACHE_TTL_HOURS
    """
    return current_snapshot(cache).to_dict()


@router.get("/", response_class=HTMLResponse)
def get_schedule_page(request: Request, cache: ScheduleCache = Depends(schedule_cache)):
    """Página HTML con los partidos agrupados por día"""
    snapshot = current_snapshot(cache)
    return get_templates().TemplateResponse(
        request,
        "schedule.html",
        {
            "schedule": snapshot.schedule,
            "last_refresh": snapshot.last_refresh,
        },
    )


@router.post("/schedule/refresh", response_model=RefreshResponse)
def force_refresh(cache: ScheduleCache = Depends(schedule_cache)):
    """
    Fuerza la descarga de la programación ignorando el TTL.

    Si la descarga falla se responde 502 y el caché sigue con los datos anteriores.
    """
    try:
        snapshot = cache.refresh()
    except ScheduleRefreshError as e:
        raise HTTPException(502, f"Error refrescando programación: {e}")

    return {
        "message": f"Programación actualizada ({len(snapshot.schedule)} días)",
        "cache": cache.get_stats(),
    }
