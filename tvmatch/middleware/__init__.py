"""
Middleware para logging de requests HTTP
Captura método, ruta, status y tiempo de cada request
"""
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware que logea cada request:
    - Método HTTP y ruta
    - Cliente y parámetros query
    - Tiempo de procesamiento (también en el header X-Process-Time)
    - Status code
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        client_host = request.client.host if request.client else None

        logger.info(
            f"[REQUEST] {request.method} {request.url.path} | "
            f"Client: {client_host} | "
            f"Query: {dict(request.query_params)}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                f"[REQUEST] ERROR en {request.method} {request.url.path} | "
                f"Time: {process_time:.3f}s | "
                f"Error: {str(e)}",
                exc_info=True
            )
            raise

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            f"[REQUEST] {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Time: {process_time:.3f}s"
        )
        return response


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    Middleware para alertar sobre requests lentos (p.ej. un refresco que
    tarda por la descarga remota)
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 5.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        if process_time > self.slow_request_threshold:
            logger.warning(
                f"[PERFORMANCE] Request lento detectado: "
                f"{request.method} {request.url.path} | "
                f"Tiempo: {process_time:.3f}s (umbral: {self.slow_request_threshold}s)"
            )

        return response
