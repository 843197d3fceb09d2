# attendly/services/invitation_store.py
# -----------------------------------------------------------------------------
# Persistence for invitations over a SQLAlchemy Session.
#
# The store is the only place that talks to the database. It is built per
# request around the request's Session (see utils/invitation_dep.py), so there is no
# process-wide state. Every SQLAlchemyError is rolled back, logged and
# re-raised as StoreError.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendly.models.invitation import Invitation, RsvpStatus
from attendly.services.errors import StoreError

log = logging.getLogger(__name__)


class InvitationStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("invitation store: %s failed", action)
            raise StoreError(f"{action} failed") from e

    # ---------- writes ----------

    def add(self, invitation: Invitation) -> Invitation:
        with self._guard("insert"):
            self.db.add(invitation)
            self.db.commit()
            self.db.refresh(invitation)
        return invitation

    def save(self, invitation: Invitation) -> Invitation:
        with self._guard("update"):
            self.db.commit()
            self.db.refresh(invitation)
        return invitation

    def delete(self, invitation_id: str) -> bool:
        with self._guard("delete"):
            row = self.db.get(Invitation, invitation_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
        return True

    # ---------- reads ----------

    def get(self, invitation_id: str) -> Optional[Invitation]:
        with self._guard("get"):
            return self.db.get(Invitation, invitation_id)

    def list_all(self) -> List[Invitation]:
        stmt = select(Invitation).order_by(Invitation.created_at.desc(), Invitation.id.asc())
        with self._guard("list"):
            return list(self.db.scalars(stmt).all())

    def count(self) -> int:
        with self._guard("count"):
            return int(self.db.scalar(select(func.count()).select_from(Invitation)) or 0)

    def count_by_status(self) -> Dict[RsvpStatus, int]:
        """{status: n} for every status, zeros included."""
        stmt = select(Invitation.status, func.count(Invitation.id)).group_by(Invitation.status)
        with self._guard("count_by_status"):
            rows = self.db.execute(stmt).all()
        counts = {s: 0 for s in RsvpStatus}
        for status, n in rows:
            counts[status] = int(n)
        return counts

    def recent_by_updated(self, limit: int) -> List[Invitation]:
        stmt = (
            select(Invitation)
            .order_by(Invitation.updated_at.desc(), Invitation.id.asc())
            .limit(limit)
        )
        with self._guard("recent_by_updated"):
            return list(self.db.scalars(stmt).all())

    def recent_by_status_change(self, limit: int) -> List[Invitation]:
        stmt = (
            select(Invitation)
            .where(Invitation.status_changed_at.is_not(None))
            .order_by(Invitation.status_changed_at.desc(), Invitation.id.asc())
            .limit(limit)
        )
        with self._guard("recent_by_status_change"):
            return list(self.db.scalars(stmt).all())
