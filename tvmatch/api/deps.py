from datetime import timedelta
from functools import lru_cache
from tvmatch.core.cache import ScheduleCache
from tvmatch.core.config import get_settings
from tvmatch.services.fetcher import HttpFetcher
from tvmatch.services.schedule_service import TvMatchenService


@lru_cache
def http_fetcher() -> HttpFetcher:
    """Cliente HTTP para descargar la página"""
    s = get_settings()
    return HttpFetcher(timeout=s.HTTP_TIMEOUT, user_agent=s.USER_AGENT)


@lru_cache
def tvmatchen_service() -> TvMatchenService:
    """Descarga + parseo de tvmatchen.nu"""
    s = get_settings()
    return TvMatchenService(
        fetcher=http_fetcher(),
        url=s.TVMATCHEN_URL,
        leagues=s.LEAGUES,
        days_to_show=s.DAYS_TO_SHOW,
    )


@lru_cache
def schedule_cache() -> ScheduleCache:
    """Caché único del proceso, compartido por todos los handlers"""
    s = get_settings()
    return ScheduleCache(
        loader=tvmatchen_service().load_schedule,
        ttl=timedelta(hours=s.CACHE_TTL_HOURS),
    )
