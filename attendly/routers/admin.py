# attendly/routers/admin.py
# Admin dashboard: metrics + invitation table, recent RSVP activity.

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from attendly.config import STATUS_FEED_LIMIT
from attendly.schemas.admin import (
    AdminDashboardOut,
    AdminMetricsOut,
    InvitationTableEntryOut,
    StatusFeedOut,
    StatusUpdateOut,
)
from attendly.services.errors import InvitationError
from attendly.services.invitations import InvitationService
from attendly.utils.http_errors import to_http_exception
from attendly.utils.invitation_dep import get_invitation_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("", response_model=AdminDashboardOut)
def get_admin_dashboard(service: InvitationService = Depends(get_invitation_service)):
    try:
        metrics = service.metrics()
        rows = service.admin_invitations()
    except InvitationError as e:
        raise to_http_exception(e)
    return AdminDashboardOut(
        metrics=AdminMetricsOut(**metrics),
        invitations=[InvitationTableEntryOut(**row) for row in rows],
    )


@router.get("/status", response_model=StatusFeedOut)
def get_status_updates(
    limit: int = Query(STATUS_FEED_LIMIT, ge=1, le=100),
    only_status_changes: bool = Query(
        False,
        alias="onlyStatusChanges",
        description="Only invitations whose RSVP status actually changed",
    ),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    Latest activity for the dashboard. By default any edit of an invitation
    shows up here (ordered by updatedAt); onlyStatusChanges=true narrows it to
    real RSVP transitions.
    """
    try:
        items = service.recent_status_updates(limit=limit, only_status_changes=only_status_changes)
    except InvitationError as e:
        raise to_http_exception(e)
    return StatusFeedOut(status_updates=[StatusUpdateOut(**item) for item in items])
