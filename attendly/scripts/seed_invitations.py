"""
Idempotent demo invitations for a fresh database. Run:
  $ python -m attendly.scripts.seed_invitations
Invitations are matched by name; existing ones are left untouched.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select

from attendly.config import EVENT_DATE, EVENT_VENUE
from attendly.db import SessionLocal
from attendly.models.invitation import Invitation
from attendly.services.invitation_store import InvitationStore
from attendly.services.invitations import InvitationService
from attendly.utils.logging import setup_logging

log = logging.getLogger(__name__)

DEMO_INVITATIONS = [
    {"name": "Sarah & John Smith", "status": "confirmed", "plus_one": 2},
    {"name": "Michael Johnson", "status": "pending", "plus_one": 1},
    {"name": "Emily Davis", "status": "declined", "plus_one": 0},
    {"name": "Test User", "status": "pending", "plus_one": 2},
]


def seed(db) -> List[str]:
    """Creates the missing demo invitations, returns their ids."""
    service = InvitationService(InvitationStore(db))
    existing = set(db.scalars(select(Invitation.name)).all())
    created = []
    for row in DEMO_INVITATIONS:
        if row["name"] in existing:
            continue
        inv = service.create(
            name=row["name"],
            event_date=EVENT_DATE,
            venue=EVENT_VENUE,
            status=row["status"],
            plus_one=row["plus_one"],
        )
        created.append(inv.id)
    return created


def main() -> None:
    setup_logging()
    with SessionLocal() as db:
        created = seed(db)
    log.info("seeded %d invitation(s)", len(created))


if __name__ == "__main__":
    main()
