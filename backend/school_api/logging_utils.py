import logging
from time import perf_counter
from typing import Any, Dict, Optional

logger = logging.getLogger("school_api")


def log_event(resource: str, action: str, message: str, **extra: Any) -> None:
    payload: Dict[str, Any] = {"resource": resource, "action": action, "message": message}
    payload.update(extra)
    logger.info(payload)


class OperationTimer:
    """Context manager to measure elapsed time for a controller operation."""

    def __init__(self, resource: str, action: str, message: str) -> None:
        self.resource = resource
        self.action = action
        self.message = message
        self.elapsed_ms: Optional[float] = None
        self._start: Optional[float] = None

    def __enter__(self) -> "OperationTimer":
        self._start = perf_counter()
        log_event(self.resource, self.action, f"{self.message} - start")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_ms = round((perf_counter() - self._start) * 1000, 2)
        status = "failed" if exc else "done"
        log_event(
            self.resource,
            self.action,
            f"{self.message} - {status}",
            elapsed_ms=self.elapsed_ms,
            error=str(exc) if exc else None,
        )
