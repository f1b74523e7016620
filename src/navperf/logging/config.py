"""Logging setup for navperf's component loggers.

Each component logs under ``navperf.<component>``. Output goes to stderr
so CLI reports on stdout stay clean.
"""

import logging
import sys
from typing import IO, Iterable, Mapping

LOGGER_NAME = "navperf"

# Levels kept when debug mode is enabled for every component; naming a
# component explicitly lifts its cap
DEBUG_CAPS: dict[str, int] = {
    "performance.events": logging.INFO,
}

_configuredLevel = logging.WARNING
_overridden: set[str] = set()


def _loggerName(component: str) -> str:
    if component == LOGGER_NAME or component.startswith(f"{LOGGER_NAME}."):
        return component
    return f"{LOGGER_NAME}.{component}"


def _resolveLevel(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


class TelemetryFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] component: message``.

    The ``navperf.`` prefix is dropped from logger names. With
    ``includeUptime`` each line starts with milliseconds since logging
    was loaded, which lines up with monotonic mark timestamps.
    """

    def __init__(self, includeUptime: bool = True):
        fmt = "[%(levelname)s] %(component)s: %(message)s"
        if includeUptime:
            fmt = "%(relativeCreated)9.1fms " + fmt
        super().__init__(fmt=fmt)

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(f"{LOGGER_NAME}."):
            name = name[len(LOGGER_NAME) + 1:]
        record.component = name
        return super().format(record)


def configureLogging(
    level: int | str = logging.INFO,
    components: Mapping[str, int | str] | None = None,
    stream: IO[str] | None = None,
    logFile: str | None = None,
    includeUptime: bool = True,
) -> logging.Logger:
    """Configure the navperf logger tree.

    Args:
        level: Level for the ``navperf`` logger.
        components: Per-component level overrides, e.g. {"navigation": "DEBUG"}.
        stream: Console stream (defaults to stderr).
        logFile: Optional file path that also receives every record.
        includeUptime: Prefix lines with process uptime in milliseconds.

    Returns:
        The ``navperf`` logger.

    Raises:
        ValueError: If a level name is unknown.
    """
    global _configuredLevel

    logger = logging.getLogger(LOGGER_NAME)
    _configuredLevel = _resolveLevel(level)
    logger.setLevel(_configuredLevel)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    consoleHandler = logging.StreamHandler(stream or sys.stderr)
    consoleHandler.setFormatter(TelemetryFormatter(includeUptime=includeUptime))
    logger.addHandler(consoleHandler)

    if logFile:
        fileHandler = logging.FileHandler(logFile, encoding="utf-8")
        fileHandler.setFormatter(TelemetryFormatter(includeUptime=True))
        logger.addHandler(fileHandler)

    _resetComponents()
    for component, componentLevel in (components or {}).items():
        _setComponentLevel(component, _resolveLevel(componentLevel))

    logger.propagate = False
    return logger


def setDebugMode(enabled: bool = True, components: Iterable[str] | None = None) -> None:
    """Turn debug logging on or off.

    Args:
        enabled: Whether to enable debug output.
        components: Components to debug (None for all, with DEBUG_CAPS applied).
            Disabling always returns every component to the configured level.
    """
    if not enabled:
        _resetComponents()
        logging.getLogger(LOGGER_NAME).setLevel(_configuredLevel)
        return

    if components is None:
        logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG)
        for component, cap in DEBUG_CAPS.items():
            _setComponentLevel(component, cap)
        return

    for component in components:
        _setComponentLevel(component, logging.DEBUG)


def _setComponentLevel(component: str, level: int) -> None:
    name = _loggerName(component)
    logging.getLogger(name).setLevel(level)
    _overridden.add(name)


def _resetComponents() -> None:
    while _overridden:
        logging.getLogger(_overridden.pop()).setLevel(logging.NOTSET)


# Quiet by default until an application configures logging
if not logging.getLogger(LOGGER_NAME).handlers:
    configureLogging(level=logging.WARNING)
