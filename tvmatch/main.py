from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tvmatch.core.config import get_settings
from tvmatch.api.routers import health, schedule

# ===== IMPORTS DE LOGGING =====
from tvmatch.core.logging_config import setup_logging
from tvmatch.middleware import RequestLoggingMiddleware, PerformanceMonitoringMiddleware
import logging

logger = logging.getLogger(__name__)

def create_app(configure_logging: bool = True) -> FastAPI:
    s = get_settings()

    if configure_logging:
        setup_logging(level=s.LOG_LEVEL, logs_dir=s.LOGS_DIR, log_to_file=s.LOG_TO_FILE)

    logger.info("Iniciando creación de aplicación FastAPI...")

    app = FastAPI(
        title="Fotboll på TV:n",
        version="1.0.0",
        description="Partidos de fútbol televisados según tvmatchen.nu"
    )

    # ============== MIDDLEWARES ==============

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(PerformanceMonitoringMiddleware, slow_request_threshold=s.SLOW_REQUEST_THRESHOLD)
    logger.info(f"✓ Request logging y performance monitoring activados (umbral: {s.SLOW_REQUEST_THRESHOLD}s)")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=s.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"✓ CORS configurado para orígenes: {s.CORS_ORIGINS}")

    # ============== ROUTERS ==============

    app.include_router(schedule.router)
    app.include_router(health.router)
    logger.info("✓ Todos los routers incluidos")

    @app.on_event("startup")
    async def startup_event():
        logger.info("=" * 80)
        logger.info("INICIANDO FOTBOLL PÅ TV:N")
        logger.info(f"  Fuente: {s.TVMATCHEN_URL}")
        logger.info(f"  Ligas: {', '.join(s.LEAGUES)}")
        logger.info(f"  Días: {s.DAYS_TO_SHOW} | TTL caché: {s.CACHE_TTL_HOURS}h")
        logger.info("=" * 80)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Apagando Fotboll på TV:n...")

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info("Iniciando servidor Uvicorn...")
    uvicorn.run(
        "tvmatch.main:app",
        host="0.0.0.0",
        port=8003,
        reload=True,
        log_config=None
    )
