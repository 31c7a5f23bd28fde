# tvmatch/core/config.py
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]

class Settings(BaseSettings):
    # === Fuente de la programación ===
    TVMATCHEN_URL: str = "http://www.tvmatchen.nu/"
    HTTP_TIMEOUT: float = 10.0
    USER_AGENT: str = "tvmatch/1.0 (+http://www.tvmatchen.nu/)"

    # === Filtro de partidos ===
    # Subcadenas de liga que nos interesan (sensible a mayúsculas)
    LEAGUES: List[str] = ["Premier League"]
    DAYS_TO_SHOW: int = 10

    # === Configuración de Caché ===
    CACHE_TTL_HOURS: float = 10.0

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    LOGS_DIR: str = "logs"
    LOG_TO_FILE: bool = True
    SLOW_REQUEST_THRESHOLD: float = 5.0

    # === Plantillas / CORS ===
    TEMPLATES_DIR: str = str(BASE_DIR / "templates")
    CORS_ORIGINS: List[str] = ["*"]

    # Configuración de pydantic v2
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

@lru_cache
def get_settings() -> Settings:
    return Settings()
