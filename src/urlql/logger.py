"""Logging helpers for urlql.

All loggers live under the ``urlql`` namespace so applications embedding the
parser can tune its verbosity independently of their own output.
"""

import logging
from typing import Optional

from urlql.settings import settings as api_settings

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_NAMESPACE = "urlql"

_configured = False


def _resolve_level(level: Optional[str]) -> int:
    return _LEVELS.get((level or "").upper(), logging.INFO)


def setup_global_logging(level: str = "INFO") -> None:
    """Configure the root logger once in a standardized format.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=_resolve_level(level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _configured = True


def get_logger(name: Optional[str] = None) -> "Logger":
    """Return a logger scoped under the ``urlql`` namespace.

    Args:
        name: Component name, e.g. ``"Parser"``
    """
    return Logger(name)


class Logger:
    """Thin wrapper over standard logging.

    `.message(text)` logs at the configured LOG_LEVEL, falling back to `INFO`
    when the setting is empty or unknown.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(api_settings.LOG_LEVEL)
        if not name or name == _NAMESPACE or name.startswith(_NAMESPACE + "."):
            qualified = name or _NAMESPACE
        else:
            qualified = f"{_NAMESPACE}.{name}"
        self._logger = logging.getLogger(qualified)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def message(self, msg: str, *args, **kwargs) -> None:
        self._logger.log(_resolve_level(api_settings.LOG_LEVEL), msg, *args, **kwargs)
