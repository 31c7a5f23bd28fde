"""Esquemas Pydantic para la programación de partidos"""
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Match(BaseModel):
    """Un partido televisado

    Las claves JSON (Name, League, Channel, Time) se mantienen iguales que
    en la versión anterior de /schedule.json.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field("", alias="Name")
    league: str = Field("", alias="League")
    channel: str = Field("", alias="Channel")
    time: str = Field("", alias="Time")  # texto tal cual aparece en la página

    def __str__(self) -> str:
        return f"* {self.time} {self.name} ({self.league}, {self.channel})"


# día ("2024-01-01 - Måndag") -> partidos en orden de documento
Schedule = Dict[str, List[Match]]


class CacheStatsResponse(BaseModel):
    """Estadísticas del caché de programación"""
    last_refresh: Optional[str] = None  # RFC3339
    age_seconds: Optional[float] = None
    ttl_seconds: float
    stale: bool
    days: int
    matches: int
    refresh_count: int
    failure_count: int
    last_error: Optional[str] = None


class RefreshResponse(BaseModel):
    """Respuesta de un refresco forzado"""
    message: str
    cache: CacheStatsResponse


class HealthResponse(BaseModel):
    status: str
    source_url: str
    leagues: List[str]
    cache: CacheStatsResponse
