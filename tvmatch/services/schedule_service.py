"""Servicio que arma la programación a partir de tvmatchen.nu"""
from typing import Sequence
import logging

from tvmatch.core.logging_config import TimingLogger
from tvmatch.schemas.schedule import Schedule
from tvmatch.services.fetcher import Fetcher
from tvmatch.services.schedule_parser import DAYS_TO_SHOW, parse_html, parse_schedule

logger = logging.getLogger(__name__)


class TvMatchenService:
    """Descarga + parseo; se usa como loader del ScheduleCache"""

    def __init__(
        self,
        fetcher: Fetcher,
        url: str,
        leagues: Sequence[str],
        days_to_show: int = DAYS_TO_SHOW,
    ):
        self.fetcher = fetcher
        self.url = url
        self.leagues = list(leagues)
        self.days_to_show = days_to_show

    def load_schedule(self) -> Schedule:
        """
        Descarga la página y devuelve una programación completa nueva

        Raises:
            ScheduleFetchError: la descarga falló
            ScheduleParseError: el contenido no es HTML interpretable
        """
        with TimingLogger(f"Refresco de programación desde {self.url}", logger_name=__name__):
            content = self.fetcher.fetch(self.url)
            document = parse_html(content)
            return parse_schedule(document, self.leagues, self.days_to_show)
