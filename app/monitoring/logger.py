from __future__ import annotations
import logging
from typing import Any, Dict


def _format_fields(fields: Dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items() if value is not None)


class StructuredLogger:
    """
    Key=value log lines on a named stdlib logger.

    Create one per module (`StructuredLogger(__name__)`) so request and
    domain events can be filtered by where they were emitted.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _emit(self, level: int, kind: str, request_id: str | None, fields: Dict[str, Any]) -> None:
        self.logger.log(level, "%s %s", kind, _format_fields({"request_id": request_id, **fields}))

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        request_id: str | None = None,
    ) -> None:
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self._emit(
            level,
            "api_request",
            request_id,
            {
                "method": method,
                "path": path,
                "status": status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

    def log_event(
        self,
        event: str,
        request_id: str | None = None,
        **fields: Any,
    ) -> None:
        """Leaderboard computed, score stored and similar domain events."""
        self._emit(logging.INFO, event, request_id, fields)

    def log_error(
        self,
        message: str,
        error: Exception | None = None,
        request_id: str | None = None,
    ) -> None:
        self._emit(
            logging.ERROR,
            "api_error",
            request_id,
            {
                "message": message,
                "error_type": type(error).__name__ if error else None,
                "error": str(error) if error else None,
            },
        )
