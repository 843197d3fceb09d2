# attendly/models/invitation.py
# -----------------------------------------------------------------------------
# MODEL: Invitation (SQLAlchemy)
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum

from sqlalchemy import Column, DateTime, Enum, Index, Integer, String, Text, text

from attendly.db import Base


class RsvpStatus(enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    declined = "declined"
    rescinded = "rescinded"


class Invitation(Base):
    """
    One invited guest or party. The only persisted entity of the service.
    Timestamps are naive UTC and are written by the service, not the database,
    so updated_at always moves forward on every write.
    """
    __tablename__ = "invitations"

    id = Column(String(36), primary_key=True)

    name = Column(String(255), nullable=False)
    event_date = Column(DateTime, nullable=False)
    venue = Column(String(255), nullable=False)

    status = Column(
        Enum(RsvpStatus, name="rsvp_status"),
        nullable=False,
        default=RsvpStatus.pending,
        server_default=text("'pending'"),
    )

    # extra guests, 0..MAX_PLUS_ONE
    plus_one = Column(Integer, nullable=False, default=0, server_default=text("0"))

    # PNG data URL of the guest link; generated once at creation
    qr_code = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    # only set when a write actually changes status
    status_changed_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_invitations_status", "status"),
        Index("ix_invitations_created_at", "created_at"),
        Index("ix_invitations_updated_at", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Invitation id={self.id} name={self.name!r} status={self.status}>"
