"""Centralized logging configuration using Loguru.

Human-readable output goes to stderr so that it never interleaves with the
report on stdout. An NDJSON mode is available for machine consumption.

Usage:
    from nixdoc.utils.logging import logger
    logger.warning("Message")
    logger.debug("Debug message")  # Only shows if NIXDOC_LOG_LEVEL=DEBUG

Environment Variables:
    NIXDOC_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    NIXDOC_LOG_JSON: 0|1 (default: 0, human-readable)
    NIXDOC_LOG_FILE: path to log file (optional, always NDJSON)
"""

import json
import os
import sys

from loguru import logger

# Remove default handler
logger.remove()

# Numeric levels for NDJSON records
JSON_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("NIXDOC_LOG_LEVEL", "WARNING").upper()
_json_mode = os.environ.get("NIXDOC_LOG_JSON", "0") == "1"
_log_file = os.environ.get("NIXDOC_LOG_FILE")


def _to_json_record(message) -> str:
    """Serialize a loguru message into a single NDJSON line."""
    record = message.record

    payload = {
        "level": JSON_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }

    for key, value in record["extra"].items():
        payload[key] = value if isinstance(value, (int, float, bool)) else str(value)

    if record["exception"]:
        payload["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(payload)


def json_sink(message):
    """Write NDJSON records to stderr.

    Never call logger.* inside a sink - causes infinite recursion.
    """
    sys.stderr.write(_to_json_record(message) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(json_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:
    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_json_record(message) + "\n")

    logger.add(_file_sink, level="DEBUG")


__all__ = [
    "logger",
    "json_sink",
]
