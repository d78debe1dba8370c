"""
Structured logging for certsync.

Provides a pre-configured logger that emits JSON-structured log records
with reconciliation context (certificate, zone, action) so operators can
filter a single notification's trail in CloudWatch Logs.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

_CONTEXT_FIELDS = ("request_id", "certificate_arn", "zone_id", "action", "operation")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via CertsyncLogger.log_operation
        for key in _CONTEXT_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class CertsyncLogger:
    """Convenience wrapper around :mod:`logging` for reconciliation steps."""

    def __init__(self, name: str = "certsync") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            # Lambda installs its own root handler; avoid duplicate lines.
            self.logger.propagate = False

    def set_level(self, level: str | int) -> None:
        self.logger.setLevel(level)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        request_id: str | None = None,
        certificate_arn: str | None = None,
        zone_id: str | None = None,
        action: str | None = None,
        operation: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with reconciliation context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            request_id: Notification id; auto-generated if omitted.
            certificate_arn: Certificate being reconciled.
            zone_id: Hosted zone being read or changed.
            action: Change action (``CREATE`` / ``DELETE``).
            operation: Step name (e.g. ``fetch_validation_records``).
            exc_info: Whether to include exception info.
        """
        extra = {
            "request_id": request_id or uuid.uuid4().hex[:12],
            "certificate_arn": certificate_arn,
            "zone_id": zone_id,
            "action": action,
            "operation": operation,
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
cs_logger = CertsyncLogger()
