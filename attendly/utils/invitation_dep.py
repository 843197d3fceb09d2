# attendly/utils/invitation_dep.py
# FastAPI dependency: one InvitationService per request, bound to its Session.

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from attendly.db import get_db
from attendly.services.invitation_store import InvitationStore
from attendly.services.invitations import InvitationService


def get_invitation_service(db: Session = Depends(get_db)) -> InvitationService:
    return InvitationService(InvitationStore(db))
