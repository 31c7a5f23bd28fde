"""Errores del pipeline descarga -> parseo -> caché"""


class ScheduleError(Exception):
    """Base para todos los errores de la programación"""


class ScheduleRefreshError(ScheduleError):
    """El refresco falló; el snapshot anterior sigue intacto"""


class ScheduleFetchError(ScheduleRefreshError):
    """No se pudo descargar la página (red, DNS, timeout o status no 2xx)"""


class ScheduleParseError(ScheduleRefreshError):
    """El contenido descargado no se pudo interpretar como HTML"""


class ScheduleUnavailableError(ScheduleError):
    """No hay ningún snapshot válido que servir (primer refresco fallido)"""
