"""
Unified logging configuration for the recording converter.
Provides singleton pattern to ensure single configuration per process.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ...config.settings import ConverterSettings, converter_settings

SERVICE_NAME = "recording-converter"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}
    # Explicit extra_fields dicts are flattened into the rest
    nested = fields.pop("extra_fields", None)
    if isinstance(nested, dict):
        fields.update(nested)
    return fields


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def __init__(self, environment: str = "production"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "service": SERVICE_NAME,
            "environment": self.environment
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        log_entry.update(_extra_fields(record))

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.COLORS.get(record.levelname, '')
        reset_color = self.COLORS['RESET']
        line = (
            f"{self.formatTime(record)} - {record.name} - "
            f"{level_color}{record.levelname}{reset_color} - {record.getMessage()}"
        )

        fields = _extra_fields(record)
        if fields:
            line += " | " + " | ".join(f"{k}={v}" for k, v in fields.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LoggingManager:
    """Singleton manager for logging configuration."""

    _instance: Optional['LoggingManager'] = None
    _configured: bool = False

    def __new__(cls) -> 'LoggingManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def configure(self, settings: Optional[ConverterSettings] = None, force: bool = False) -> None:
        """
        Install the stdout handler on the root logger.

        The Lambda runtime pre-installs its own root handler; it is replaced
        so every line goes through our formatter.
        """
        if self._configured and not force:
            return

        settings = settings or converter_settings
        log_level = getattr(logging, settings.log_level, logging.INFO)

        if settings.is_production_env:
            formatter = JSONFormatter(settings.environment)
        else:
            formatter = DevelopmentFormatter()

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

        root_logger = logging.getLogger()
        for existing in list(root_logger.handlers):
            root_logger.removeHandler(existing)
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

        self._configure_third_party_loggers()
        LoggingManager._configured = True

        logging.getLogger(__name__).debug("Logging configuration initialized", extra={
            "environment": settings.environment,
            "log_level": logging.getLevelName(log_level),
            "formatter": "json" if settings.is_production_env else "development"
        })

    def _configure_third_party_loggers(self) -> None:
        """Configure third-party library loggers to reduce noise."""
        for logger_name in ("boto3", "botocore", "urllib3", "s3transfer"):
            third_party = logging.getLogger(logger_name)
            if third_party.level < logging.WARNING:
                third_party.setLevel(logging.WARNING)


# Singleton instance
logging_manager = LoggingManager()


def configure_logging(settings: Optional[ConverterSettings] = None, force: bool = False) -> None:
    """Configure process logging once (subsequent calls are no-ops unless forced)."""
    logging_manager.configure(settings, force=force)
