# attendly/utils/http_errors.py
# Service exceptions -> HTTPException with a {"code": ...} detail.

from __future__ import annotations

from fastapi import HTTPException
from starlette import status

from attendly.services.errors import (
    InvitationError,
    InvitationNotFound,
    StoreError,
    TransitionNotAllowed,
    ValidationError,
)


def to_http_exception(exc: InvitationError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_detail())
    if isinstance(exc, InvitationNotFound):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": exc.code, "message": "Invitation not found"},
        )
    if isinstance(exc, TransitionNotAllowed):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "code": exc.code,
                "from": exc.current,
                "to": exc.requested,
                "allowed": exc.allowed,
                "message": str(exc),
            },
        )
    if isinstance(exc, StoreError):
        # the cause is already logged by the store; never leak it
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": exc.code, "message": "Storage error, please retry"},
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"code": exc.code, "message": "Internal error"},
    )
