"""Structured logging configuration for the Okecho tank table tool."""

import json
import logging
import logging.handlers
import os
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

UTC = timezone.utc

APP_NAME = "okecho"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    CONTEXT_FIELDS = ("request_id", "method", "path")

    def __init__(self, include_traceback: bool = True):
        super().__init__()
        self.include_traceback = include_traceback

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        for field in self.CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if hasattr(record, "extra"):
            log_data["extra"] = record.extra

        if record.exc_info and self.include_traceback:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str, ensure_ascii=False)


class ConversionLogger:
    """Records the outcome of every conversion on a dedicated logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, event: str, details: dict[str, Any], level: int = logging.INFO):
        self.logger.log(level, f"CONVERSION: {event}", extra={"extra": {
            "event": event,
            **details,
        }})

    def converted(self, tank_id: str, direction: str, value: int, result: dict[str, Any]):
        """Log a successful conversion."""
        self._log("conversion.succeeded", {
            "tank_id": tank_id,
            "direction": direction,
            "input": value,
            "output": result.get("display_value"),
            "unit": result.get("unit"),
            "exact": result.get("exact"),
        })

    def rejected(self, tank_id: str, direction: str, raw_value: Any, reason: str):
        """Log a conversion that returned a failure."""
        self._log("conversion.rejected", {
            "tank_id": tank_id,
            "direction": direction,
            "input": raw_value,
            "reason": reason,
        }, level=logging.WARNING)


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter,
                      max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    app_name: str = APP_NAME,
    log_level: str | None = None,
    log_dir: str | Path | None = None,
    json_format: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> tuple[logging.Logger, ConversionLogger]:
    """
    Configure application logging.

    Args:
        app_name: Logger name prefix
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var or INFO.
        log_dir: Directory for log files. Defaults to 'logs/' in project root.
        json_format: Use JSON formatting (True for prod, can disable for dev readability)
        max_bytes: Max log file size before rotation (default 10MB)
        backup_count: Number of backup files to keep (default 5)

    Returns:
        Tuple of (main logger, conversion logger)
    """
    if log_level is None:
        env = os.environ.get("FLASK_ENV", "development")
        log_level = os.environ.get(
            "LOG_LEVEL",
            "DEBUG" if env == "development" else "INFO"
        )

    level = getattr(logging, log_level.upper(), logging.INFO)

    log_dir = Path(log_dir) if log_dir else Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    if json_format:
        formatter = JSONFormatter()
    else:
        # Human-readable format for development
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    # Application logger; "services.*" loggers share its handlers
    app_logger = logging.getLogger(app_name)
    services_logger = logging.getLogger("services")
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers = [
        console_handler,
        _rotating_handler(
            log_dir / f"{app_name}.log", level, formatter, max_bytes, backup_count,
        ),
        # ERROR+ only, separate file for quick scanning
        _rotating_handler(
            log_dir / f"{app_name}_errors.log", logging.ERROR, JSONFormatter(),
            max_bytes, backup_count,
        ),
    ]
    for logger in (app_logger, services_logger):
        logger.setLevel(level)
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    # Conversion events (always INFO+, separate file)
    conversion_logger = logging.getLogger(f"{app_name}.conversions")
    conversion_logger.setLevel(logging.INFO)
    conversion_logger.handlers.clear()
    conversion_logger.propagate = False
    conversion_logger.addHandler(_rotating_handler(
        log_dir / f"{app_name}_conversions.log", logging.INFO, JSONFormatter(),
        max_bytes, backup_count,
    ))

    app_logger.info(f"Logging initialized: level={log_level}, dir={log_dir}")

    return app_logger, ConversionLogger(conversion_logger)


def get_logger(name: str = APP_NAME) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def get_conversion_logger() -> ConversionLogger:
    """Get the conversion event logger."""
    return ConversionLogger(logging.getLogger(f"{APP_NAME}.conversions"))
