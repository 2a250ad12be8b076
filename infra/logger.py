"""
Logging setup shared by the agent, the runner and the API.

Call ``configure_logging`` once at process start (``main.py`` does it); every
module then grabs its own logger with ``get_logger(__name__)``. Without the
call, records propagate to whatever the host process configured.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .paths import LOG_DIR, STORAGE_DIR

__all__ = ["STORAGE_DIR", "LOG_DIR", "configure_logging", "get_logger", "JsonFormatter"]

_ROOT_NAME = "city_agent"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(
    level: str | int = "INFO",
    json: bool = False,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """
    Configure the project logger (console + optional file).

    Args:
        level: Log level name or number
        json: Emit JSON lines instead of plain text
        log_file: File to also write to. Relative paths land in storage/logs.

    Returns:
        The configured project root logger
    """
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if json:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        if not path.is_absolute():
            path = LOG_DIR / path
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the project root logger."""
    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
