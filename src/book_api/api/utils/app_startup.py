"""Loguru setup for the book API process."""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.book_api.runtime.config.config_data import ConfigData, LoggingConfig
from src.book_api.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Request lines come from the HTTP middleware
DROPPED_LOGGERS = frozenset({"uvicorn.access"})

STDLIB_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
    "httpx": logging.WARNING,
    "watchfiles": logging.WARNING,
}


class InterceptHandler(logging.Handler):
    """Forward standard ``logging`` records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.name in DROPPED_LOGGERS:
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _default_request_id(record) -> None:
    record["extra"].setdefault("request_id", "-")


def _add_console_sink(cfg: LoggingConfig, tracebacks: bool) -> int:
    return logger.add(
        sys.stderr,
        level=cfg.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=tracebacks,
        diagnose=tracebacks,
    )


def _add_file_sink(cfg: LoggingConfig, tracebacks: bool) -> int | None:
    """Add the rotating file sink, JSON lines when ``format`` is ``json``."""
    if not cfg.file:
        return None

    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    return logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=tracebacks,
        diagnose=tracebacks,
    )


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    for name, level in STDLIB_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: ConfigData | None = None) -> None:
    """Replace all Loguru sinks according to the ``logging`` config section.

    Tracebacks with variable values are only rendered outside production.
    """
    config = config or get_config()
    cfg = config.logging
    tracebacks = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"}, patcher=_default_request_id)

    _add_console_sink(cfg, tracebacks)
    _add_file_sink(cfg, tracebacks)
    _route_stdlib_logging()

    logger.bind(
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=config.app.environment,
    ).info("Logging configured")
