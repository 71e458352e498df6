# cardsmith/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON)
===============================================================================

Objetivo
--------
Un único logger "cardsmith" que emite una línea JSON por evento en stderr,
así stdout queda libre para la salida del CLI.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger() + configure_logging()

Responsabilidades:
  - Copiar los campos `extra=` al payload JSON
  - Redactar claves sensibles (API keys)
  - Recortar strings largos: el texto fuente puede ser un ensayo entero
  - Serializar Segments (to_dict) y enums por valor

Colaboradores:
  - crosscutting/config.py (log_level, log_json)
  - cli.py (--verbose)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Final

LOGGER_NAME: Final[str] = "cardsmith"

REDACTED: Final[str] = "***REDACTADO***"
TRUNCATED_SUFFIX: Final[str] = "…(truncado)"
MAX_STRING_CHARS: Final[int] = 2_000
MAX_DEPTH: Final[int] = 4

_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {"api_key", "apikey", "google_api_key", "authorization", "token", "secret"}
)

# Atributos que todo LogRecord trae de fábrica; el resto vino por `extra=`.
_RECORD_ATTRS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _sanitize(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    if key is not None and key.lower() in _SENSITIVE_KEYS:
        return REDACTED
    if depth > MAX_DEPTH:
        return "***TRUNCADO***"

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str):
        if len(value) <= MAX_STRING_CHARS:
            return value
        return value[:MAX_STRING_CHARS] + TRUNCATED_SUFFIX
    if isinstance(value, (int, float, bool)) or value is None:
        return value
    if hasattr(value, "to_dict"):
        value = value.to_dict()
    if isinstance(value, dict):
        return {
            str(k): _sanitize(v, key=str(k), depth=depth + 1) for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_sanitize(v, key=key, depth=depth + 1) for v in value]
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> una línea JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload[key] = _sanitize(value, key=key)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def configure_logging(level: str = "INFO", *, json_output: bool = True) -> logging.Logger:
    """(Re)configura el logger global: nivel + un único handler en stderr."""
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(log.handlers):
        log.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        JSONFormatter() if json_output else logging.Formatter("%(levelname)s %(message)s")
    )
    log.addHandler(handler)
    return log


def setup_logger() -> logging.Logger:
    """
    Logger global configurado desde Settings cuando están disponibles.

    Settings puede no validar todavía (API key ausente) al importar; en ese
    caso se usan los defaults y el CLI reporta el error de config.
    """
    from pydantic import ValidationError

    from .config import get_settings

    try:
        settings = get_settings()
    except ValidationError:
        return configure_logging()
    return configure_logging(settings.log_level, json_output=settings.log_json)


# Instancia global (import-friendly)
logger = setup_logger()
