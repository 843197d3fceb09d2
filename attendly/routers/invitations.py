# attendly/routers/invitations.py
# -----------------------------------------------------------------------------
# INVITATIONS ROUTER
# -----------------------------------------------------------------------------
#   GET    /invitations            - all invitations (newest first)
#   GET    /invitations/defaults   - pre-filled values for the create form
#   POST   /invitations            - create (201)
#   GET    /invitations/{id}       - one invitation
#   PUT    /invitations/{id}       - edit fields (admin)
#   PATCH  /invitations/{id}       - RSVP status only (guest page / admin)
#   DELETE /invitations/{id}       - hard delete
#
# Mounted under /api in main.py. Every handler is one service call; service
# errors are turned into HTTP errors by utils/http_errors.py.
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from starlette import status

from attendly.config import EVENT_DATE, EVENT_VENUE, MAX_PLUS_ONE
from attendly.models.invitation import RsvpStatus
from attendly.schemas.invitation import (
    InvitationCreate,
    InvitationDefaultsOut,
    InvitationEnvelope,
    InvitationListOut,
    InvitationOut,
    InvitationStatusUpdate,
    InvitationUpdate,
    MessageOut,
)
from attendly.services.errors import InvitationError, InvitationNotFound
from attendly.services.invitations import InvitationService
from attendly.utils.http_errors import to_http_exception
from attendly.utils.invitation_dep import get_invitation_service

router = APIRouter(prefix="/invitations", tags=["Invitations"])


def _envelope(invitation) -> InvitationEnvelope:
    return InvitationEnvelope(invitation=InvitationOut.model_validate(invitation))


@router.get("", response_model=InvitationListOut)
def list_invitations(service: InvitationService = Depends(get_invitation_service)):
    try:
        rows = service.list_all()
    except InvitationError as e:
        raise to_http_exception(e)
    return InvitationListOut(invitations=[InvitationOut.model_validate(r) for r in rows])


@router.get("/defaults", response_model=InvitationDefaultsOut)
def invitation_defaults():
    """The fixed event configuration the create form starts from."""
    return InvitationDefaultsOut(
        event_date=EVENT_DATE,
        venue=EVENT_VENUE,
        status=RsvpStatus.pending,
        plus_one=0,
        max_plus_one=MAX_PLUS_ONE,
    )


@router.post("", response_model=InvitationEnvelope, status_code=status.HTTP_201_CREATED)
def create_invitation(
    body: InvitationCreate,
    service: InvitationService = Depends(get_invitation_service),
):
    try:
        invitation = service.create(
            name=body.name,
            event_date=body.event_date,
            venue=body.venue,
            status=body.status,
            plus_one=body.plus_one,
        )
    except InvitationError as e:
        raise to_http_exception(e)
    return _envelope(invitation)


@router.get("/{invitation_id}", response_model=InvitationEnvelope)
def get_invitation(
    invitation_id: str = Path(..., min_length=1, max_length=64, description="Invitation id"),
    service: InvitationService = Depends(get_invitation_service),
):
    try:
        invitation = service.get(invitation_id)
    except InvitationError as e:
        raise to_http_exception(e)
    return _envelope(invitation)


@router.put("/{invitation_id}", response_model=InvitationEnvelope)
def update_invitation(
    body: InvitationUpdate,
    invitation_id: str = Path(..., min_length=1, max_length=64, description="Invitation id"),
    service: InvitationService = Depends(get_invitation_service),
):
    """Applies the fields present in the body; the rest stay as they are."""
    try:
        invitation = service.update(invitation_id, body.model_dump(exclude_unset=True))
    except InvitationError as e:
        raise to_http_exception(e)
    return _envelope(invitation)


@router.patch("/{invitation_id}", response_model=InvitationEnvelope)
def update_rsvp_status(
    body: InvitationStatusUpdate,
    invitation_id: str = Path(..., min_length=1, max_length=64, description="Invitation id"),
    service: InvitationService = Depends(get_invitation_service),
):
    try:
        invitation = service.set_status(invitation_id, body.status)
    except InvitationError as e:
        raise to_http_exception(e)
    return _envelope(invitation)


@router.delete("/{invitation_id}", response_model=MessageOut)
def delete_invitation(
    invitation_id: str = Path(..., min_length=1, max_length=64, description="Invitation id"),
    service: InvitationService = Depends(get_invitation_service),
):
    try:
        deleted = service.delete(invitation_id)
    except InvitationError as e:
        raise to_http_exception(e)
    if not deleted:
        raise to_http_exception(InvitationNotFound(invitation_id))
    return MessageOut(message="Invitation deleted successfully")
