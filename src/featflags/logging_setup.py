"""Logging setup for featflags.

Two loggers are configured, neither of them the root logger:

* ``featflags`` - diagnostics from the library itself (parse progress,
  consumed flags), filtered by ``logging.level``.
* ``featflags.emit`` - output of the default ``trace``/``test_trace``/``dump``
  emitters. Those calls are already gated by feature flags, so this logger
  always passes INFO and renders ``[mode feature] message`` lines.

``logging.format: json`` switches both to one JSON object per line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import IO, TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from featflags.config import Config

PACKAGE_LOGGER = "featflags"
EMIT_LOGGER = "featflags.emit"

TEXT_FORMAT = "%(name)s: %(levelname)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """Emit JSON log lines for machine-readable structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("mode", "feature"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class EmitFormatter(logging.Formatter):
    """Render an emitted diagnostic as ``[trace parser] message``."""

    def format(self, record: logging.LogRecord) -> str:
        mode = getattr(record, "mode", "emit")
        feature = getattr(record, "feature", "?")
        return f"[{mode} {feature}] {record.getMessage()}"


def _install(name: str, level: int, formatter: logging.Formatter, stream: Optional[IO[str]]) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def setup_logging(config: "Config", stream: Optional[IO[str]] = None) -> None:
    """Configure the featflags logger tree from config.logging.

    ``stream`` defaults to stderr. The root logger is left alone so a host
    application's own logging configuration is not disturbed.
    """
    log_cfg = config.logging
    level = getattr(logging, log_cfg.level.upper(), logging.WARNING)
    as_json = log_cfg.format.lower() == "json"

    _install(
        PACKAGE_LOGGER,
        level,
        StructuredFormatter() if as_json else logging.Formatter(TEXT_FORMAT),
        stream,
    )
    _install(
        EMIT_LOGGER,
        logging.INFO,
        StructuredFormatter() if as_json else EmitFormatter(),
        stream,
    )
