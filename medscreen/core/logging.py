"""Logging setup and the audit trail of clinical writes."""

import logging
import sys
from typing import Any

from medscreen.core.config import settings

# Third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "passlib": logging.ERROR,
}

DEV_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Record attributes copied into structured lines when present
AUDIT_FIELDS = ("action", "actor", "entity")


class StructuredFormatter(logging.Formatter):
    """Single-line key=value output for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"timestamp={self.formatTime(record, self.datefmt)}",
            f"level={record.levelname}",
            f"logger={record.name}",
        ]
        parts.extend(
            f"{name}={getattr(record, name)}" for name in AUDIT_FIELDS if hasattr(record, name)
        )
        parts.append(f"message={record.getMessage()}")

        if record.exc_info:
            parts.append(f"exception={self.formatException(record.exc_info)!r}")

        return " ".join(parts)


def setup_logging(level: str | None = None) -> None:
    """Route all logging to stdout, plain in dev and structured elsewhere."""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        logging.Formatter(DEV_FORMAT) if settings.is_dev else StructuredFormatter()
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name, cap in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(cap)


class AuditLogger:
    """Writes one line per create/update/delete of a clinical record.

    Screenings, submissions, calorie calculations, questionnaires and
    patient records all pass through here; scores and tiers go in metadata.
    """

    def __init__(self, name: str = "medscreen.audit") -> None:
        self.logger = logging.getLogger(name)

    def log(
        self,
        action: str,
        actor_type: str,
        actor_id: str,
        entity_type: str,
        entity_id: str | None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        actor = f"{actor_type}:{actor_id}"
        entity = f"{entity_type}:{entity_id or '-'}"
        self.logger.info(
            f"AUDIT {action} by {actor} on {entity} {metadata or {}}",
            extra={"action": action, "actor": actor, "entity": entity},
        )


audit_logger = AuditLogger()
