"""
Logging Setup.

structlog on top of the stdlib logging module, configured from
config/settings/logging.yaml. Every module logs through ``get_logger``;
nothing creates its own handlers.

Each record carries timestamp, level, logger, event, func_name and
lineno. Keyword arguments become extra fields:

    logger = get_logger(__name__)
    logger.info("Note saved", note_id="1718000000000")

``source`` says which part of the app a record comes from (ui, editor,
storage, ...). It is always passed explicitly, see ``log_with_source``.

The optional file handler writes one JSON object per line to the path
configured in logging.yaml, rotated by size.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from noteku.core.config import find_project_root, load_yaml_config

VALID_SOURCES = frozenset({"ui", "editor", "storage", "internal", "unknown"})

_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite")

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """Read logging.yaml once and keep it for later calls."""
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _get_logging_config() -> dict[str, Any]:
    return _load_logging_config()


def _resolve_log_path(configured_path: str) -> Path:
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    """Processors applied to structlog and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _file_handler(file_config: dict[str, Any], formatter: logging.Formatter) -> logging.Handler:
    log_path = _resolve_log_path(file_config["path"])
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config["max_bytes"],
        backupCount=file_config["backup_count"],
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments left as None take their value from logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'json' or 'console' for the console handler
        enable_console: Write records to stdout
        enable_file_logging: Write JSON lines to the configured file
    """
    config = _get_logging_config()
    handlers_config = config["handlers"]

    if level is None:
        level = config["level"]
    if format_type is None:
        format_type = config["format"]
    if enable_console is None:
        enable_console = handlers_config["console"]["enabled"]
    if enable_file_logging is None:
        enable_file_logging = handlers_config["file"]["enabled"]

    pre_chain = _shared_processors()
    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), pre_chain)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console_handler.setFormatter(
                _formatter(structlog.dev.ConsoleRenderer(colors=True), pre_chain)
            )
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(handlers_config["file"], json_formatter))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Structlog logger for ``name``, typically ``__name__``."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log ``message`` at ``level`` with an explicit ``source`` field.

    Raises:
        AttributeError: If level is not a logger method

    Example:
        log_with_source(logger, "storage", "warning", "Blob unreadable", key="NOTES")
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
