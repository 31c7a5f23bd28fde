"""
Parser de la página de tvmatchen.nu

Estructura esperada del documento:
- <h2 class="day-name"> por cada día, con un <span class="day-name-inner"
  id="match-day-YYYY-MM-DD">
- justo después (hermano siguiente) una tabla con las filas del día
- cada fila de fútbol lleva la clase "sport-name-fotboll" con .match-name,
  .league (puede contener <a> con la jornada), .channel .channel-item[title]
  y .time .field-content
"""
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Tuple, Union
import logging

from bs4 import BeautifulSoup

from tvmatch.core.errors import ScheduleParseError
from tvmatch.schemas.schedule import Match, Schedule
from tvmatch.services.text import normalize

logger = logging.getLogger(__name__)

DAYS_TO_SHOW = 10

DAY_HEADER_SELECTOR = "h2.day-name"
DAY_ID_SELECTOR = "span.day-name-inner"
DAY_ID_PREFIX = "match-day-"
FOOTBALL_ROW_SELECTOR = ".sport-name-fotboll"

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
DAY_NAMES = {
    "Monday": "Måndag",
    "Tuesday": "Tisdag",
    "Wednesday": "Onsdag",
    "Thursday": "Torsdag",
    "Friday": "Fredag",
    "Saturday": "Lördag",
    "Sunday": "Söndag",
}

# fecha usada cuando el id del día no trae una fecha válida (es lunes)
ZERO_DATE = date.min


class HtmlNode(Protocol):
    """Lo mínimo que el parser necesita de un nodo HTML (bs4.Tag lo cumple)"""

    def select(self, selector: str) -> Iterable["HtmlNode"]: ...

    def select_one(self, selector: str) -> Optional["HtmlNode"]: ...

    def find_next_sibling(self) -> Optional["HtmlNode"]: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def get_text(self) -> str: ...


def parse_html(content: Union[bytes, str]) -> BeautifulSoup:
    """Convierte el contenido descargado en un documento consultable"""
    try:
        return BeautifulSoup(content, "html.parser")
    except Exception as e:  # bs4 lanza ParserRejectedMarkup, AssertionError, etc.
        raise ScheduleParseError(f"Contenido no interpretable como HTML: {e}") from e


def localize_weekday(name: str) -> str:
    """Nombre del día en sueco; cadena vacía si el nombre no se reconoce"""
    return DAY_NAMES.get(name, "")


def parse_day_id(raw_id: str) -> date:
    """'match-day-2024-01-01' -> date(2024, 1, 1); ZERO_DATE si no es válido"""
    value = raw_id.replace(DAY_ID_PREFIX, "")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        logger.warning(f"Id de día inválido: {raw_id!r}, usando fecha cero")
        return ZERO_DATE


def day_label(day: date) -> str:
    """date(2024, 1, 1) -> '2024-01-01 - Måndag'"""
    weekday = WEEKDAY_NAMES[day.weekday()]
    return f"{day.isoformat()} - {localize_weekday(weekday)}"


def _text(node: HtmlNode, selector: str) -> str:
    return "".join(el.get_text() for el in node.select(selector))


def league_text(row: HtmlNode) -> str:
    """Texto de la liga sin los enlaces internos (jornada, ronda...)"""
    league = _text(row, ".league")
    for link in row.select(".league a"):
        league = league.replace(link.get_text(), "")
    return normalize(league)


def is_interesting(league: str, leagues: Sequence[str]) -> bool:
    return any(wanted in league for wanted in leagues)


def extract_match(row: HtmlNode, leagues: Sequence[str]) -> Optional[Match]:
    """
    Extrae un partido de una fila de la tabla

    Args:
        row: Fila con clase sport-name-fotboll
        leagues: Subcadenas de liga que interesan

    Returns:
        Match, o None si la liga no interesa. Los campos que faltan quedan
        como cadena vacía; nunca lanza excepción.
    """
    name = _text(row, ".match-name")
    league = league_text(row)

    if not is_interesting(league, leagues):
        logger.debug(f"Fila descartada, liga sin interés: {league!r}")
        return None

    channel_element = row.select_one(".channel .channel-item")
    channel = channel_element.get("title", "") if channel_element is not None else ""
    time = _text(row, ".time .field-content")

    return Match(name=name, league=league, channel=channel or "", time=time)


def parse_day(header: HtmlNode, leagues: Sequence[str]) -> Tuple[str, List[Match]]:
    """Devuelve (etiqueta del día, partidos) para una cabecera h2.day-name"""
    inner = header.select_one(DAY_ID_SELECTOR)
    raw_id = inner.get("id", "") if inner is not None else ""
    label = day_label(parse_day_id(raw_id or ""))

    matches: List[Match] = []
    table = header.find_next_sibling()
    if table is None:
        return label, matches

    for row in table.select(FOOTBALL_ROW_SELECTOR):
        match = extract_match(row, leagues)
        if match is not None:
            matches.append(match)
    return label, matches


def parse_schedule(
    document: HtmlNode,
    leagues: Sequence[str],
    days_to_show: int = DAYS_TO_SHOW,
) -> Schedule:
    """
    Recorre los días del documento y arma el mapa día -> partidos

    Solo se consideran los primeros `days_to_show` días. Un día sin partidos
    de interés queda en el mapa con una lista vacía. Si dos días producen la
    misma etiqueta, el último sobrescribe al primero.
    """
    headers = list(document.select(DAY_HEADER_SELECTOR))
    if not headers:
        logger.warning("No se encontraron cabeceras de día en el documento")

    schedule: Schedule = {}
    for header in headers[:days_to_show]:
        label, matches = parse_day(header, leagues)
        schedule[label] = matches

    total = sum(len(m) for m in schedule.values())
    logger.info(f"Programación parseada: {len(schedule)} días, {total} partidos")
    return schedule
