from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Literal, Optional

from .request_id import get_request_id

AuditAction = Literal["reservation.created", "reservation.deleted"]


def _build_audit_logger() -> logging.Logger:
    logger = logging.getLogger("audit")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger


_audit_logger = _build_audit_logger()


def emit_audit_log(
    *,
    action: AuditAction,
    reservation_id: int,
    member_id: Optional[int],
    time_id: Optional[int] = None,
    theme_id: Optional[int] = None,
    reservation_date: Optional[date] = None,
) -> None:
    """Write one JSON line per reservation change to the ``audit`` logger.

    Empty fields are omitted. Raises RuntimeError when the line cannot be
    written, so callers can fail the request instead of losing the record.
    """
    fields: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc),
        "action": action,
        "request_id": get_request_id(),
        "reservation_id": reservation_id,
        "member_id": member_id,
        "time_id": time_id,
        "theme_id": theme_id,
        "date": reservation_date,
    }
    record = {key: value for key, value in fields.items() if value is not None}
    try:
        line = json.dumps(record, default=lambda value: value.isoformat(), separators=(",", ":"))
        _audit_logger.info(line)
    except Exception as exc:
        raise RuntimeError("failed to emit audit log") from exc
