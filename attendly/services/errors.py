# attendly/services/errors.py
# Service-level errors. Routers translate them into HTTP responses.

from __future__ import annotations

from typing import Iterable, Optional, Sequence


class InvitationError(Exception):
    code = "invitation_error"


class ValidationError(InvitationError):
    """Missing or invalid input field (-> 400)."""

    def __init__(self, code: str, fields: Iterable[str] = (), message: Optional[str] = None):
        self.code = code
        self.fields = list(fields)
        if message is None:
            message = f"{code}: {', '.join(self.fields)}" if self.fields else code
        self.message = message
        super().__init__(message)

    def to_detail(self) -> dict:
        detail = {"code": self.code, "message": self.message}
        if self.fields:
            detail["fields"] = self.fields
        return detail


class InvitationNotFound(InvitationError):
    code = "invitation_not_found"

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__(f"invitation {invitation_id} not found")


class TransitionNotAllowed(InvitationError):
    code = "transition_not_allowed"

    def __init__(self, current: str, requested: str, allowed: Sequence[str] = ()):
        self.current = current
        self.requested = requested
        self.allowed = list(allowed)
        super().__init__(f"status cannot move from {current} to {requested}")


class StoreError(InvitationError):
    """Persistence failure. The cause is logged; callers get an opaque message."""
    code = "store_error"
