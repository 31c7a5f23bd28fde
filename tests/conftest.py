from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional, Union

import pytest

# antes de importar tvmatch: nada de archivos de log durante los tests
os.environ.setdefault("LOG_TO_FILE", "false")

from tvmatch.schemas.schedule import Match, Schedule  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class StaticFetcher:
    """Fetcher que devuelve siempre el mismo documento (o lanza un error)"""

    def __init__(self, content: bytes = b"", error: Optional[Exception] = None) -> None:
        self.content = content
        self.error = error
        self.urls: List[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.content


class FakeClock:
    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, hours: float) -> None:
        self.now += timedelta(hours=hours)


class CountingLoader:
    """Loader para ScheduleCache que cuenta llamadas; acepta resultados o errores"""

    def __init__(self, *results: Union[Schedule, Exception]) -> None:
        self.results = list(results)
        self.calls = 0

    def __call__(self) -> Schedule:
        self.calls += 1
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result


def build_page(days: List[str], rows: str = "") -> str:
    """Documento mínimo con una cabecera + tabla por cada fecha ISO"""
    parts = []
    for day in days:
        parts.append(
            f'<h2 class="day-name"><span class="day-name-inner" id="match-day-{day}">{day}</span></h2>'
            f'<table>{rows}</table>'
        )
    return "<html><body>" + "\n".join(parts) + "</body></html>"


def football_row(name: str, league: str, channel: str = "TV", time: str = "20:00") -> str:
    return (
        '<tr class="sport-name-fotboll">'
        f'<td class="match-name">{name}</td>'
        f'<td class="league">{league}</td>'
        f'<td class="channel"><span class="channel-item" title="{channel}"></span></td>'
        f'<td class="time"><span class="field-content">{time}</span></td>'
        '</tr>'
    )


@pytest.fixture
def fixture_html() -> bytes:
    return (FIXTURES / "tvmatchen.html").read_bytes()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_schedule() -> Schedule:
    return {
        "2024-01-01 - Måndag": [
            Match(name="Arsenal - Fulham", league="Premier League", channel="Viaplay", time="18:30"),
        ],
        "2024-01-02 - Tisdag": [],
    }


@pytest.fixture
def loader_factory() -> Callable[..., CountingLoader]:
    return CountingLoader
