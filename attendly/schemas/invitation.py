# attendly/schemas/invitation.py
# -----------------------------------------------------------------------------
# Pydantic schemas: Invitation
# -----------------------------------------------------------------------------
# JSON uses camelCase (eventDate, plusOne, qrCode, ...). Incoming bodies are
# accepted in camelCase and in snake_case.
#
# Request schemas are deliberately loose (everything Optional): presence and
# range checks live in the service so every caller gets the same 400 errors.
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, Field, PlainSerializer, StrictBool, validator
from pydantic.alias_generators import to_camel

from attendly.models.invitation import RsvpStatus


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def _utc_iso(v: datetime) -> str:
    # stored values are naive UTC
    if v.tzinfo is None:
        v = v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


UtcDateTime = Annotated[datetime, PlainSerializer(_utc_iso, return_type=str)]

# a JSON true stays a bool so the service rejects it instead of reading it as 1
PlusOne = Optional[Union[StrictBool, int]]


def _blank_to_none(v):
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


def _normalize_status(v):
    v = _blank_to_none(v)
    if isinstance(v, str):
        return v.strip().lower()
    return v


# ---------- requests ----------

class InvitationCreate(CamelModel):
    name: Optional[str] = Field(None, description="Guest / party display name")
    event_date: Optional[datetime] = Field(None, description="Event date and time")
    venue: Optional[str] = Field(None, description="Venue")
    status: Optional[RsvpStatus] = Field(None, description="pending|confirmed|declined|rescinded (default pending)")
    plus_one: PlusOne = Field(None, description="Additional guests (default 0)")

    @validator("event_date", pre=True)
    def _event_date_blank(cls, v):
        return _blank_to_none(v)

    @validator("status", pre=True)
    def _status_norm(cls, v):
        return _normalize_status(v)


class InvitationUpdate(CamelModel):
    """Only the fields that were sent are applied."""
    name: Optional[str] = None
    event_date: Optional[datetime] = None
    venue: Optional[str] = None
    status: Optional[RsvpStatus] = None
    plus_one: PlusOne = None

    @validator("status", pre=True)
    def _status_norm(cls, v):
        return _normalize_status(v)


class InvitationStatusUpdate(CamelModel):
    status: Optional[RsvpStatus] = Field(None, description="New RSVP status (required)")

    @validator("status", pre=True)
    def _status_norm(cls, v):
        return _normalize_status(v)


# ---------- responses ----------

class InvitationOut(CamelModel):
    id: str
    name: str
    event_date: UtcDateTime
    venue: str
    status: RsvpStatus
    plus_one: int
    qr_code: Optional[str] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
    status_changed_at: Optional[UtcDateTime] = None


class InvitationEnvelope(CamelModel):
    invitation: InvitationOut


class InvitationListOut(CamelModel):
    invitations: List[InvitationOut] = Field(default_factory=list)


class InvitationDefaultsOut(CamelModel):
    """Pre-filled values for the admin create form."""
    event_date: str
    venue: str
    status: RsvpStatus = RsvpStatus.pending
    plus_one: int = 0
    max_plus_one: int


class MessageOut(CamelModel):
    message: str
