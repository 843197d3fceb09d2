# attendly/schemas/admin.py
# Admin dashboard payloads.

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from attendly.models.invitation import RsvpStatus
from attendly.schemas.invitation import CamelModel, UtcDateTime


class AdminMetricsOut(CamelModel):
    total: int
    confirmed_count: int
    pending_count: int
    declined_count: int
    rescinded_count: int
    attendance_rate: int  # percent, 0..100


class InvitationTableEntryOut(CamelModel):
    id: str
    name: str
    event_date: UtcDateTime
    venue: str
    status: RsvpStatus
    has_qr_code: bool
    qr_code: Optional[str] = None
    plus_one: int
    created_at: UtcDateTime
    updated_at: UtcDateTime


class AdminDashboardOut(CamelModel):
    metrics: AdminMetricsOut
    invitations: List[InvitationTableEntryOut] = Field(default_factory=list)


class StatusUpdateOut(CamelModel):
    id: str
    name: str
    status: RsvpStatus
    timestamp: UtcDateTime


class StatusFeedOut(CamelModel):
    status_updates: List[StatusUpdateOut] = Field(default_factory=list)
