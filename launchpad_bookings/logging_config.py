"""
Logging configuration for the launch pad bookings service.

Loggers come from structlog and render through the standard library handlers,
so uvicorn, aiohttp and SQLAlchemy output lands in the same stream. Context
bound with structlog.contextvars (request IDs, see api/middleware.py) is
merged into every event logged while handling a request.
"""

import os
import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

import structlog
from structlog.types import FilteringBoundLogger, Processor


SERVICE_NAME = "launchpad-bookings"

REDACTED_KEYS = ('password', 'token', 'secret', 'authorization', 'database_url')

NOISY_LOGGERS = {
    'aiohttp.access': logging.WARNING,
    'aiohttp.client': logging.WARNING,
    'sqlalchemy.engine': logging.WARNING,
    'sqlalchemy.pool': logging.WARNING,
    'uvicorn.access': logging.WARNING,
}


class LogConfig:
    """Logging settings, read from LOG_* environment variables."""

    def __init__(self, log_level: Optional[str] = None):
        self.log_level = (log_level or os.getenv('LOG_LEVEL', 'INFO')).upper()
        self.log_format = os.getenv('LOG_FORMAT', 'json')  # json or console
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))
        self.enable_file_logging = os.getenv('ENABLE_FILE_LOGGING', 'false').lower() == 'true'
        self.max_log_size = int(os.getenv('LOG_MAX_SIZE_MB', '100')) * 1024 * 1024
        self.backup_count = int(os.getenv('LOG_BACKUP_COUNT', '5'))

        if self.enable_file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def add_timestamp(logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Stamp the event with the current UTC time."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_service_context(logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag the event with the service name and the emitting component."""
    event_dict["service"] = SERVICE_NAME
    event_dict.setdefault("component", "unknown")
    return event_dict


def _redact(values: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for key, value in values.items():
        if any(marker in key.lower() for marker in REDACTED_KEYS):
            redacted[key] = "[REDACTED]"
        elif isinstance(value, dict):
            redacted[key] = _redact(value)
        else:
            redacted[key] = value
    return redacted


def filter_sensitive_data(logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Replace credentials and connection strings, including nested ones, with a marker."""
    return _redact(event_dict)


def build_processors(config: LogConfig) -> List[Processor]:
    """Processor chain shared by every structlog logger."""
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        add_timestamp,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context,
        filter_sensitive_data,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.log_format == 'console':
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())
    return processors


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """
    Configure stdlib logging and structlog for the service.

    Safe to call more than once; the CLI calls it again with the level
    given on the command line.

    Args:
        config: LogConfig instance, read from the environment if None
    """
    config = config or LogConfig()

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(config.level)

    structlog.configure(
        processors=build_processors(config),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if config.enable_file_logging:
        setup_file_logging(config)

    configure_third_party_loggers()


def setup_file_logging(config: LogConfig) -> None:
    """Add a size-rotated log file next to stdout output."""
    path = config.log_dir / "launchpad_bookings.log"
    root_logger = logging.getLogger()
    if any(getattr(h, "baseFilename", None) == str(path.resolve()) for h in root_logger.handlers):
        return

    file_handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=config.max_log_size,
        backupCount=config.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(config.level)
    root_logger.addHandler(file_handler)


def configure_third_party_loggers() -> None:
    """Raise the threshold of chatty library loggers."""
    for logger_name, level in NOISY_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str, component: Optional[str] = None) -> FilteringBoundLogger:
    """
    Get a structured logger.

    The component tag is passed as an initial value rather than bound, so the
    returned proxy stays lazy and picks up the configuration applied by
    setup_logging() even when called at import time.

    Args:
        name: Logger name (usually __name__)
        component: Component tag added to every event

    Returns:
        Lazy structlog logger proxy
    """
    if component:
        return structlog.get_logger(name, component=component)
    return structlog.get_logger(name)
