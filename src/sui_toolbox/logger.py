"""Structured logging for the Sui test toolbox."""
import logging
import json
import time
from typing import Any, Optional
from contextlib import contextmanager
import os

# Configure log level from environment (default: INFO)
LOG_LEVEL = os.getenv("SUI_TOOLBOX_LOG_LEVEL", "INFO").upper()

# Package logger; module loggers (sui_toolbox.*) propagate here
logger = logging.getLogger("sui_toolbox")


# JSON formatter for structured logging
class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: Optional[str] = None, json_format: bool = True) -> logging.Logger:
    """
    Attach a console handler to the package logger.

    Safe to call more than once; the handler is only added the first time.
    """
    level_name = (level or LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_sui_toolbox", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        if json_format:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._sui_toolbox = True
        logger.addHandler(handler)

    return logger


def log_event(message: str, level: int = logging.INFO, **fields: Any):
    """Log a message with structured fields."""
    logger.log(level, message, extra={"extra_fields": fields})


def log_retry(operation: str, attempt: int, delay: float, error: BaseException):
    """Log a retry decision."""
    logger.warning(f"Retrying {operation} (attempt {attempt}, next in {delay:.2f}s): {error}", extra={
        "extra_fields": {
            "operation": operation,
            "attempt": attempt,
            "delay_s": round(delay, 3),
            "error_type": type(error).__name__,
            "error_message": str(error)[:500],  # Truncate long errors
        }
    })


def log_error(stage: str, error_type: str, error_message: str, **context):
    """Log error with context."""
    logger.error(f"Error in {stage}: {error_message}", extra={
        "extra_fields": {
            "stage": stage,
            "error_type": error_type,
            "error_message": error_message[:500],
            **context
        }
    })


@contextmanager
def track_duration():
    """Context manager to track operation duration."""
    start_time = time.monotonic()
    yield lambda: (time.monotonic() - start_time) * 1000  # Return duration in ms
