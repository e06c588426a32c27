"""
Logging Configuration
Colored console output in development, JSON lines in production

Usage:
    from cost_report.core.logging import setup_logging
    setup_logging()
"""

from __future__ import annotations

import json
import sys

from loguru import logger

from cost_report.core.config import settings


def json_serializer(record: dict) -> str:
    """Serialize a log record as a JSON line"""
    log_entry = {
        "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    if record["extra"]:
        # Internal loguru fields are not shipped
        extra = {
            k: v
            for k, v in record["extra"].items()
            if not k.startswith("_") and k not in ("color",)
        }
        if extra:
            log_entry["extra"] = extra

    if record["exception"]:
        exc = record["exception"]
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
            "traceback": "".join(exc.traceback.format()) if exc.traceback else None,
        }

    return json.dumps(log_entry, ensure_ascii=False, default=str)


def json_sink(message):
    """JSON log sink"""
    record = message.record
    sys.stderr.write(json_serializer(record) + "\n")
    sys.stderr.flush()


# Colored format (development)
COLORED_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(environment: str | None = None) -> None:
    """
    Configure the logging system

    - development: colored output on stderr
    - production: JSON lines on stderr, for log collectors
    """
    logger.remove()

    log_level = settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT

    if environment == "production":
        logger.add(
            json_sink,
            level=log_level,
            backtrace=True,
            diagnose=False,  # never print local variables in production
        )
        logger.info("Logging configured", format="json", level=log_level)
    else:
        logger.add(
            sys.stderr,
            level=log_level,
            format=COLORED_FORMAT,
            backtrace=True,
            diagnose=True,
        )


# Request-scoped logging helpers
def log_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
):
    """Log one HTTP request"""
    logger.info(
        f"{method} {path} - {status_code}",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration_ms, 2),
    )


def log_external_call(
    service: str,
    provider: str,
    duration_ms: float,
    success: bool,
    error: str | None = None,
):
    """Log one external service call"""
    level = "info" if success else "warning"
    getattr(logger, level)(
        f"External call: {service}/{provider}",
        service=service,
        provider=provider,
        duration_ms=round(duration_ms, 2),
        success=success,
        error=error,
    )
