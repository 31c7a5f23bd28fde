"""Descarga de la página remota"""
from typing import Optional, Protocol
import logging

import requests

from tvmatch.core.errors import ScheduleFetchError

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Cualquier cosa capaz de devolver los bytes de una URL"""

    def fetch(self, url: str) -> bytes: ...


class HttpFetcher:
    """Descarga HTML con requests; los fallos salen como ScheduleFetchError"""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "tvmatch/1.0",
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}
        self.session = session or requests.Session()

    def fetch(self, url: str) -> bytes:
        logger.info(f"[FETCH] GET {url}")
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ScheduleFetchError(f"No se pudo descargar {url}: {e}") from e

        logger.info(f"[FETCH] {url} -> {response.status_code} ({len(response.content)} bytes)")
        return response.content
