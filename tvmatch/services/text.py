"""Limpieza de fragmentos de texto extraídos del HTML"""
import re

_MULTIPLE_SPACES = re.compile(r"\s+")


def normalize(raw: str) -> str:
    """Colapsa espacios y saltos de línea en un solo espacio y recorta extremos.

    Es idempotente: normalize(normalize(s)) == normalize(s).
    """
    text = raw.replace("\n", " ")
    text = _MULTIPLE_SPACES.sub(" ", text)
    return text.strip(" ")
