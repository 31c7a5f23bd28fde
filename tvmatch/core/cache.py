"""Caché en memoria de la programación con TTL"""
import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from tvmatch.core.errors import ScheduleRefreshError, ScheduleUnavailableError
from tvmatch.schemas.schedule import Match, Schedule

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=10)

FrozenSchedule = Mapping[str, Tuple[Match, ...]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def freeze_schedule(schedule: Schedule) -> FrozenSchedule:
    """Copia de solo lectura: los lectores no pueden modificar el snapshot"""
    return MappingProxyType({day: tuple(matches) for day, matches in schedule.items()})


@dataclass(frozen=True)
class ScheduleSnapshot:
    """Programación completa + momento del último refresco exitoso"""
    schedule: FrozenSchedule = field(default_factory=lambda: MappingProxyType({}))
    refreshed_at: Optional[datetime] = None
    # error del último refresco si se está sirviendo un snapshot viejo
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, list]:
        return {day: list(matches) for day, matches in self.schedule.items()}

    @property
    def last_refresh(self) -> str:
        """Timestamp RFC3339, vacío si nunca se refrescó"""
        if self.refreshed_at is None:
            return ""
        return self.refreshed_at.isoformat(timespec="seconds")


class ScheduleCache:
    """
    Caché de la programación compartido por todos los handlers.

    - Los lectores con snapshot fresco no toman el lock: leen una única
      referencia que siempre apunta a un snapshot completo e inmutable.
    - El refresco (descarga + parseo + publicación) se hace con el lock
      tomado; quien encuentra el caché vencido vuelve a comprobarlo tras
      obtener el lock, así N requests simultáneos provocan una sola descarga.
    - Si el refresco falla se conserva el snapshot anterior y su timestamp.
    """

    def __init__(
        self,
        loader: Callable[[], Schedule],
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Args:
            loader: Función que descarga y parsea una programación nueva
            ttl: Tiempo tras el cual el snapshot se considera vencido
            clock: Reloj inyectable (tests)
        """
        self._loader = loader
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot = ScheduleSnapshot()
        self.refresh_count = 0
        self.failure_count = 0
        self.last_error: Optional[str] = None
        logger.info(f"[CACHE] ScheduleCache inicializado con ttl={ttl}")

    @property
    def snapshot(self) -> ScheduleSnapshot:
        return self._snapshot

    def is_stale(self, snapshot: Optional[ScheduleSnapshot] = None) -> bool:
        if snapshot is None:
            snapshot = self._snapshot
        if snapshot.refreshed_at is None:
            return True
        return self._clock() - snapshot.refreshed_at >= self.ttl

    def get_schedule(self) -> ScheduleSnapshot:
        """
        Devuelve la programación vigente, refrescando antes si venció

        Returns:
            Snapshot actual. Si el refresco falló pero existe un snapshot
            anterior, se devuelve ese con `error` informado.

        Raises:
            ScheduleUnavailableError: el refresco falló y nunca hubo datos
        """
        snapshot = self._snapshot
        if not self.is_stale(snapshot):
            logger.debug("[CACHE HIT] Programación vigente")
            return snapshot

        with self._lock:
            snapshot = self._snapshot
            if not self.is_stale(snapshot):
                # otro hilo refrescó mientras esperábamos el lock
                logger.debug("[CACHE HIT] Programación refrescada por otro request")
                return snapshot

            logger.info("[CACHE MISS] Programación vencida, refrescando")
            try:
                return self._refresh_locked()
            except ScheduleRefreshError as e:
                if snapshot.refreshed_at is None:
                    raise ScheduleUnavailableError(
                        f"No hay programación disponible: {e}"
                    ) from e
                logger.warning(
                    f"[CACHE STALE] Sirviendo programación de {snapshot.last_refresh} "
                    f"tras error: {e}"
                )
                return replace(snapshot, error=str(e))

    def refresh(self) -> ScheduleSnapshot:
        """
        Fuerza un refresco, esté o no vencido el snapshot

        Raises:
            ScheduleRefreshError: la descarga o el parseo fallaron; el
                snapshot anterior queda intacto
        """
        with self._lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> ScheduleSnapshot:
        try:
            schedule = self._loader()
        except ScheduleRefreshError as e:
            self.failure_count += 1
            self.last_error = str(e)
            logger.error(f"[CACHE REFRESH] Error refrescando programación: {e}")
            raise

        # se construye completo y se publica con una sola asignación
        snapshot = ScheduleSnapshot(schedule=freeze_schedule(schedule), refreshed_at=self._clock())
        self._snapshot = snapshot
        self.refresh_count += 1
        self.last_error = None
        logger.info(
            f"[CACHE REFRESH] Programación actualizada: {len(snapshot.schedule)} días "
            f"({snapshot.last_refresh})"
        )
        return snapshot

    def get_stats(self) -> Dict[str, Any]:
        """
        Obtiene estadísticas del caché

        Returns:
            Diccionario con estadísticas
        """
        snapshot = self._snapshot
        age = None
        if snapshot.refreshed_at is not None:
            age = (self._clock() - snapshot.refreshed_at).total_seconds()
        return {
            "last_refresh": snapshot.last_refresh or None,
            "age_seconds": age,
            "ttl_seconds": self.ttl.total_seconds(),
            "stale": self.is_stale(snapshot),
            "days": len(snapshot.schedule),
            "matches": sum(len(m) for m in snapshot.schedule.values()),
            "refresh_count": self.refresh_count,
            "failure_count": self.failure_count,
            "last_error": self.last_error,
        }
