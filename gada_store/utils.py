# ==============================================================================
# UTILIDADES COMPARTIDAS
# ==============================================================================
# Conversión tolerante de valores de formulario y marcas de tiempo ISO
# compatibles con Date.toISOString() (milisegundos y sufijo Z).
# NaN e infinito cuentan como valores inválidos (no existen en JSON).
# ==============================================================================

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Optional


def to_float(value: Any) -> Optional[float]:
    """Convierte a float finito o retorna None si no es posible."""
    if value is None or isinstance(value, bool) or value == '':
        return None
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(as_float):
        return None
    return as_float


def to_int(value: Any) -> Optional[int]:
    """Convierte a int o retorna None si no es posible."""
    as_float = to_float(value)
    if as_float is None or as_float != int(as_float):
        return None
    return int(as_float)


def format_timestamp(moment: datetime) -> str:
    """Formatea un datetime UTC como '2025-06-30T12:00:00.000Z'."""
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Interpreta una marca ISO; retorna None si no es válida."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_iso() -> str:
    """Marca de tiempo actual en formato ISO."""
    return format_timestamp(datetime.now(timezone.utc))


def next_timestamp(previous: Any = None) -> str:
    """
    Genera una marca de tiempo estrictamente posterior a 'previous'.

    Garantiza que 'lastModified' avance aunque dos cambios ocurran
    dentro del mismo milisegundo.

    Args:
        previous: Marca anterior (ISO) o None

    Returns:
        Nueva marca ISO
    """
    now = datetime.now(timezone.utc)
    now = now.replace(microsecond=(now.microsecond // 1000) * 1000)
    last = parse_timestamp(previous)
    if last is not None and now <= last:
        now = last + timedelta(milliseconds=1)
    return format_timestamp(now)
