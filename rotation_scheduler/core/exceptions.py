# rotation_scheduler/core/exceptions.py
"""Scheduler exceptions.

Errors raised here mean an operation could not be attempted at all. A
schedule that was produced but breaks hard constraints is not an error: the
violations are reported through the schedule's counts instead.

Every exception carries a machine friendly ``code`` and is serializable via
``to_dict`` so front-ends can show it without inspecting the class.
"""
from __future__ import annotations

from typing import Optional, Any, Dict, List
from datetime import datetime, timezone


class SchedulerError(Exception):
    """Base scheduler exception with structured metadata.

    Attributes
    ----------
    message
        Human readable message.
    code
        Machine friendly error code.
    details
        Arbitrary extra data useful for debugging or UX.
    cause
        Optional underlying exception instance.
    context
        Optional lightweight context dict (ids, counts).
    """

    code: str = "SCHEDULER_ERROR"

    def __init__(
        self,
        message: str = "A scheduling error occurred",
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}({self.code}): {self.message}"
        if self.context:
            base += f" | context={self.context}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable representation of the error."""
        return {
            "error": {
                "type": self.__class__.__name__,
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "context": self.context,
                "timestamp": self.timestamp,
                "cause": repr(self.cause) if self.cause is not None else None,
            }
        }


class InvalidConfigurationError(SchedulerError):
    code = "INVALID_CONFIG"


class NoActivitiesError(SchedulerError):
    """Raised when a run is requested with an empty working set."""

    code = "NO_ACTIVITIES"

    def __init__(self, message: str = "No activities to schedule", **kwargs: Any):
        super().__init__(message, **kwargs)


class NoScheduleError(SchedulerError):
    """Raised when re-optimization is requested before any schedule exists."""

    code = "NO_SCHEDULE"

    def __init__(
        self, message: str = "No schedule available to re-optimize", **kwargs: Any
    ):
        super().__init__(message, **kwargs)


class LockedAssignmentConflictError(SchedulerError):
    """Raised when the locked subset of a schedule is not conflict free."""

    code = "LOCKED_CONFLICT"

    def __init__(
        self,
        message: str,
        *,
        activity_ids: Optional[List[str]] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.activity_ids = list(activity_ids or [])
        self.context.setdefault("activity_ids", self.activity_ids)
