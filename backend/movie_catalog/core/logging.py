"""
Movie Catalog - Logging Configuration
=====================================

Structured logging with console and rotating file outputs.

Usage:
    from movie_catalog.core.logging import get_logger, setup_logging

    # Setup logging (call once at startup)
    setup_logging()

    # Get logger for module
    logger = get_logger(__name__)
    logger.info("Movie created", movie_id=movie.id)
"""

import json
import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import StackInfoRenderer, TimeStamper, format_exc_info
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

from movie_catalog.core.config import settings

# ==========================================
# CONTEXT VARIABLES FOR REQUEST TRACKING
# ==========================================

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


# ==========================================
# CUSTOM STRUCTLOG PROCESSORS
# ==========================================

def add_request_context(logger, method_name, event_dict):
    """Add request context to log entries"""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_app_context(logger, method_name, event_dict):
    """Add application context to log entries"""
    event_dict.update({
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
    })
    return event_dict


def censor_sensitive_data(logger, method_name, event_dict):
    """Mask credentials that end up in log entries"""
    sensitive_keys = {
        "password", "token", "secret", "api_key", "authorization",
        "cookie", "mongodb_url",
    }

    def _censor_dict(obj, max_depth=5):
        if max_depth <= 0:
            return obj

        if isinstance(obj, dict):
            return {
                k: "***CENSORED***" if any(sens in k.lower() for sens in sensitive_keys)
                else _censor_dict(v, max_depth - 1)
                for k, v in obj.items()
            }
        elif isinstance(obj, (list, tuple)):
            return type(obj)(_censor_dict(item, max_depth - 1) for item in obj)
        return obj

    return _censor_dict(event_dict)


# ==========================================
# CUSTOM FORMATTERS
# ==========================================

class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info) if settings.DEBUG else None,
            }

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record):
        level_color = self.COLORS.get(record.levelname, "")
        record.levelname = f"{level_color}{record.levelname}{self.RESET}"
        record.name = f"\033[34m{record.name}{self.RESET}"
        return super().format(record)


# ==========================================
# FILE HANDLERS WITH ROTATION
# ==========================================

def parse_size(max_size: str) -> int:
    """Parse a human size such as '100MB' into bytes"""
    size_multipliers = {"KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}
    size_str = max_size.upper().strip()

    for suffix, multiplier in size_multipliers.items():
        if size_str.endswith(suffix):
            return int(size_str[:-len(suffix)]) * multiplier
    return int(size_str)


def create_file_handler(filename: str, max_size: str = "100MB", backup_count: int = 5) -> logging.Handler:
    """Create rotating file handler"""
    return logging.handlers.RotatingFileHandler(
        filename=filename,
        maxBytes=parse_size(max_size),
        backupCount=backup_count,
        encoding="utf-8",
    )


def create_timed_file_handler(filename: str, when: str = "midnight", backup_count: int = 7) -> logging.Handler:
    """Create time-based rotating file handler"""
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=filename,
        when=when,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    return handler


# ==========================================
# LOGGING SETUP
# ==========================================

def setup_logging() -> None:
    """Setup structured logging with console and optional file output"""

    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

    processors = [
        add_request_context,
        add_app_context,
        censor_sensitive_data,
        add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(ConsoleRenderer(colors=settings.LOG_FORMAT == "structured" and sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT == "json":
        console_handler.setFormatter(JSONFormatter())
    elif settings.LOG_FORMAT == "structured" and sys.stdout.isatty():
        console_handler.setFormatter(ColoredFormatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    elif settings.LOG_FORMAT == "structured":
        console_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    else:
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        if settings.LOG_ROTATION == "size":
            file_handler = create_file_handler(
                settings.LOG_FILE,
                settings.LOG_MAX_SIZE,
                settings.LOG_BACKUP_COUNT,
            )
        else:
            file_handler = create_timed_file_handler(
                settings.LOG_FILE,
                "midnight" if settings.LOG_ROTATION == "daily" else "W0",
                settings.LOG_BACKUP_COUNT,
            )
        # Always JSON on disk
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # Noisy libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    get_logger(__name__).info(
        "Logging configured",
        log_level=settings.LOG_LEVEL,
        log_format=settings.LOG_FORMAT,
        pid=os.getpid(),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for the given name"""
    return structlog.get_logger(name)


# ==========================================
# CONTEXT MANAGERS FOR REQUEST TRACKING
# ==========================================

class LogContext:
    """Context manager binding a request id to every log entry inside it"""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self.token = None

    def __enter__(self):
        self.token = request_id_var.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        request_id_var.reset(self.token)


def with_request_context(request_id: str) -> LogContext:
    """Context manager for request logging"""
    return LogContext(request_id)


# ==========================================
# STRUCTURED LOGGING HELPERS
# ==========================================

def log_api_request(method: str, path: str, status_code: int, duration: float):
    """Log API request with structured data"""

    api_logger = get_logger("api")

    log_data = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(duration * 1000, 2),
    }

    if status_code >= 500:
        api_logger.error("Request failed", **log_data)
    elif status_code >= 400:
        api_logger.warning("Request error", **log_data)
    else:
        api_logger.info("Request completed", **log_data)


__all__ = [
    "setup_logging",
    "get_logger",
    "LogContext",
    "with_request_context",
    "log_api_request",
    "request_id_var",
]
