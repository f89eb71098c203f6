"""
Logging.

structlog on top of the stdlib root logger, configured from
config/settings/logging.yaml. Every module gets its logger here:

    from notepad.core.logging import get_logger, log_with_source

    logger = get_logger(__name__)
    logger.debug("Note saved", extra={"note_id": note.id})
    log_with_source(logger, "state", "info", "Note created", note_id=note.id)

Entry points call setup_logging() once; keyword arguments override the
YAML values (cli.py does this for --verbose and --debug).

Console output goes to stderr, so command output on stdout stays clean.
The optional file handler writes one JSON object per line to a rotating
file (logs/system.jsonl by default). Records carry timestamp, level,
logger, event, func_name, lineno and, when tagged, source.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from notepad.core.config import find_project_root, load_yaml_config

VALID_SOURCES = frozenset({
    "cli",
    "tui",
    "repository",
    "state",
    "internal",
    "unknown",
})
"""Values accepted for the `source` field. Anything else is logged as "unknown"."""

# Third-party loggers that are noisy below WARNING
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx")

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """Read logging.yaml once per process."""
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
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
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=pre_chain,
    )


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
    Install handlers on the root logger and configure structlog.

    Any argument left as None falls back to logging.yaml. Existing root
    handlers are replaced, so calling this twice is safe.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: "json" or "console" (console handler only; the file is always JSON)
        enable_console: Write to stderr
        enable_file_logging: Write to the rotating JSONL file
    """
    config = _load_logging_config()
    handlers_config = config["handlers"]

    if level is None:
        level = config["level"]
    if format_type is None:
        format_type = config["format"]
    if enable_console is None:
        enable_console = handlers_config["console"]["enabled"]
    if enable_file_logging is None:
        enable_file_logging = handlers_config["file"]["enabled"]

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), processors)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        if format_type == "console":
            console_formatter = _formatter(structlog.dev.ConsoleRenderer(colors=True), processors)
        else:
            console_formatter = json_formatter
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(handlers_config["file"], json_formatter))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger, typically get_logger(__name__)."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit source tag.

    Example:
        log_with_source(logger, "repository", "info", "Note saved", note_id=1)

    Raises:
        AttributeError: If level is not a logger method
    """
    if source not in VALID_SOURCES:
        source = "unknown"
    getattr(logger, level.lower())(message, source=source, **kwargs)
