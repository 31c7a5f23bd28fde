from fastapi import APIRouter, Depends
from tvmatch.api.deps import schedule_cache
from tvmatch.core.cache import ScheduleCache
from tvmatch.core.config import get_settings
from tvmatch.schemas.schedule import HealthResponse

router = APIRouter(tags=["health"])

@router.get("/health", response_model=HealthResponse)
def health(cache: ScheduleCache = Depends(schedule_cache)):
    """
    Health check con el estado del caché

    No dispara ningún refresco: solo informa.
    - `status` es "degraded" si el último refresco falló
    """
    s = get_settings()
    stats = cache.get_stats()
    return {
        "status": "degraded" if stats["last_error"] else "ok",
        "source_url": s.TVMATCHEN_URL,
        "leagues": s.LEAGUES,
        "cache": stats,
    }
