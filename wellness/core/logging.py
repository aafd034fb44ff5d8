"""Logging setup and the assessment audit trail."""

import logging
import sys
from typing import Any

from wellness.core.config import settings

# Record attributes copied into structured output when a caller sets them
# through ``extra=``.
CONTEXT_FIELDS = ("client_id", "assessment_id", "domain", "action")

DEV_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers kept at WARNING
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


class StructuredFormatter(logging.Formatter):
    """Render a record as a single line of key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                fields[name] = value

        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)

        return " ".join(f"{key}={value}" for key, value in fields.items())


def setup_logging(level: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Dev gets a readable line format; every other environment gets
    StructuredFormatter so log shippers can split the fields.

    Args:
        level: Level name overriding ``settings.log_level``
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        logging.Formatter(DEV_FORMAT) if settings.is_dev else StructuredFormatter()
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class AuditLogger:
    """Writes one AUDIT line per assessment submission or status change."""

    def __init__(self, name: str = "audit") -> None:
        self.logger = logging.getLogger(name)

    def log(
        self,
        action: str,
        actor_type: str,
        actor_id: str | None,
        assessment_id: str,
        metadata: dict[str, Any] | None = None,
        client_id: str | None = None,
        domain: str | None = None,
    ) -> None:
        actor = f"{actor_type}:{actor_id or 'unknown'}"
        self.logger.info(
            f"AUDIT: action={action} actor={actor} "
            f"entity=assessment:{assessment_id} metadata={metadata or {}}",
            extra={
                "action": action,
                "assessment_id": assessment_id,
                "client_id": client_id,
                "domain": domain,
            },
        )


audit_logger = AuditLogger()
