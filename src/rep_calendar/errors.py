"""Error taxonomy shared by the engine, planning and agent layers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of errors surfaced to callers."""

    INVALID_OPERATION = "invalid_operation"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"


class CalendarError(Exception):
    """Base class for all errors raised by rep_calendar.

    Carries a structured ``kind`` so callers can map errors to display
    messages without inspecting exception text.
    """

    kind: ErrorKind = ErrorKind.INVALID_OPERATION

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "context": dict(self.context)}


class InvalidOperation(CalendarError, ValueError):
    """The requested operation is not valid for the current state or input."""

    kind = ErrorKind.INVALID_OPERATION


class NotFound(CalendarError, LookupError):
    """The target of a mutation does not exist."""

    kind = ErrorKind.NOT_FOUND


class PermissionDenied(CalendarError, PermissionError):
    """The acting role may not perform the operation."""

    kind = ErrorKind.PERMISSION_DENIED
