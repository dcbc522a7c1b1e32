"""Logging configuration.

Provides JSON-formatted logging for the lexcheck CLI. Log lines go to
stderr so stdout stays reserved for command output.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k in ("nsid", "did", "address"):
            if hasattr(record, k):
                payload[k] = getattr(record, k)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
):
    """Configure logging with JSON formatter.

    Args:
        log_level: Log level. Defaults to LEXCHECK_LOG_LEVEL env var or 'WARNING'.
        log_file: Optional path to an append-mode log file. Defaults to
            LEXCHECK_LOG_FILE env var; no file handler when unset.
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(JsonFormatter())
    handlers = [console_handler]

    log_file = log_file or os.getenv("LEXCHECK_LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setFormatter(JsonFormatter())
        handlers.append(file_handler)

    root = logging.getLogger()
    log_level = (log_level or os.getenv("LEXCHECK_LOG_LEVEL", "WARNING")).upper()
    root.setLevel(getattr(logging, log_level, logging.WARNING))
    root.handlers = handlers
