# attendly/services/invitations.py
# -----------------------------------------------------------------------------
# Invitation lifecycle and dashboard aggregates.
#
#   • create / get / list_all / update / set_status / delete
#   • metrics(): totals per RSVP status + attendance rate
#   • recent_status_updates(): feed for the admin dashboard
#
# Collaborators are injected: the store (database), the QR encoder, the RSVP
# transition policy and the clock. The service never commits by itself; each
# write is exactly one store call.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from attendly.config import MAX_PLUS_ONE, RSVP_TRANSITIONS, STATUS_FEED_LIMIT
from attendly.models.invitation import Invitation, RsvpStatus
from attendly.services.errors import (
    InvitationNotFound,
    TransitionNotAllowed,
    ValidationError,
)
from attendly.services.invitation_store import InvitationStore
from attendly.services.qr import invitation_qr_code
from attendly.services.rsvp import RsvpTransitions

log = logging.getLogger(__name__)

StatusLike = Union[RsvpStatus, str]
DateLike = Union[datetime, str]

# python attribute -> name the client sent (used in error payloads)
_WIRE_NAMES = {
    "name": "name",
    "event_date": "eventDate",
    "venue": "venue",
    "status": "status",
    "plus_one": "plusOne",
}
UPDATABLE_FIELDS = tuple(_WIRE_NAMES)


def utc_now() -> datetime:
    """Current UTC time, naive (the way timestamps are stored)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_invitation_id() -> str:
    return str(uuid.uuid4())


# =========================
# input coercion
# =========================

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_status(value: StatusLike) -> RsvpStatus:
    """RsvpStatus from an enum member or its name in any case ("CONFIRMED" too)."""
    if isinstance(value, RsvpStatus):
        return value
    if isinstance(value, str):
        try:
            return RsvpStatus(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError(
        "invalid_field",
        ["status"],
        f"status must be one of: {', '.join(s.value for s in RsvpStatus)}",
    )


def parse_event_date(value: DateLike) -> datetime:
    """datetime or ISO-8601 string -> naive UTC datetime."""
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(raw)
        except ValueError:
            raise ValidationError("invalid_field", ["eventDate"], "eventDate must be an ISO-8601 date/time")
    if not isinstance(value, datetime):
        raise ValidationError("invalid_field", ["eventDate"], "eventDate must be a date/time")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class InvitationService:
    def __init__(
        self,
        store: InvitationStore,
        *,
        qr_encoder: Callable[[str], str] = invitation_qr_code,
        transitions: Optional[RsvpTransitions] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_invitation_id,
        max_plus_one: int = MAX_PLUS_ONE,
    ):
        self.store = store
        self.qr_encoder = qr_encoder
        self.transitions = transitions or RsvpTransitions(RSVP_TRANSITIONS)
        self.clock = clock
        self.id_factory = id_factory
        self.max_plus_one = max_plus_one

    # ---------- helpers ----------

    def _check_plus_one(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= self.max_plus_one:
            raise ValidationError(
                "invalid_field",
                ["plusOne"],
                f"plusOne must be an integer between 0 and {self.max_plus_one}",
            )
        return value

    def _touch(self, invitation: Invitation) -> datetime:
        """Bump updated_at; it must move forward even if the clock did not."""
        now = self.clock()
        prev = invitation.updated_at
        if prev is not None and now <= prev:
            now = prev + timedelta(microseconds=1)
        invitation.updated_at = now
        return now

    def _check_transition(self, current: RsvpStatus, requested: RsvpStatus) -> None:
        if not self.transitions.allows(current, requested):
            allowed = sorted(s.value for s in self.transitions.allowed_from(current))
            raise TransitionNotAllowed(current.value, requested.value, allowed)

    def _apply_status(self, invitation: Invitation, requested: RsvpStatus, now: datetime) -> None:
        current = invitation.status
        self._check_transition(current, requested)
        if current != requested:
            invitation.status = requested
            invitation.status_changed_at = now

    # ---------- CRUD ----------

    def create(
        self,
        name: Optional[str],
        event_date: Optional[DateLike],
        venue: Optional[str],
        status: Optional[StatusLike] = None,
        plus_one: Optional[int] = None,
    ) -> Invitation:
        """
        New invitation with a fresh id and its QR token.
        name, event_date and venue are required (blank counts as missing);
        status defaults to pending, plus_one to 0.
        """
        required = (("name", name), ("event_date", event_date), ("venue", venue))
        missing = [_WIRE_NAMES[field] for field, value in required if _is_blank(value)]
        if missing:
            raise ValidationError("missing_fields", missing, f"Missing required fields: {', '.join(missing)}")

        rsvp = parse_status(status) if status is not None else RsvpStatus.pending
        extra = self._check_plus_one(plus_one) if plus_one is not None else 0

        invitation_id = self.id_factory()
        now = self.clock()
        invitation = Invitation(
            id=invitation_id,
            name=name.strip(),
            event_date=parse_event_date(event_date),
            venue=venue.strip(),
            status=rsvp,
            plus_one=extra,
            qr_code=self.qr_encoder(invitation_id),
            created_at=now,
            updated_at=now,
            status_changed_at=None,
        )
        self.store.add(invitation)
        log.info("invitation created: id=%s name=%r status=%s", invitation.id, invitation.name, rsvp.value)
        return invitation

    def get(self, invitation_id: str) -> Invitation:
        invitation = self.store.get(invitation_id)
        if invitation is None:
            raise InvitationNotFound(invitation_id)
        return invitation

    def list_all(self) -> List[Invitation]:
        return self.store.list_all()

    def update(self, invitation_id: str, fields: Mapping[str, Any]) -> Invitation:
        """
        Merge the given fields into the invitation. None means "not provided".
        id and created_at never change; updated_at is always bumped.
        """
        unknown = [k for k in fields if k not in UPDATABLE_FIELDS]
        if unknown:
            raise ValidationError("unknown_fields", unknown)

        invitation = self.get(invitation_id)
        changes = {k: v for k, v in fields.items() if v is not None}

        # validate everything before touching the row
        for field in ("name", "venue"):
            if field in changes and _is_blank(changes[field]):
                raise ValidationError("invalid_field", [field], f"{field} must not be empty")
        if "event_date" in changes:
            changes["event_date"] = parse_event_date(changes["event_date"])
        if "plus_one" in changes:
            changes["plus_one"] = self._check_plus_one(changes["plus_one"])
        requested = parse_status(changes.pop("status")) if "status" in changes else None
        if requested is not None:
            self._check_transition(invitation.status, requested)

        now = self._touch(invitation)
        if requested is not None:
            self._apply_status(invitation, requested, now)
        if "name" in changes:
            invitation.name = changes["name"].strip()
        if "venue" in changes:
            invitation.venue = changes["venue"].strip()
        if "event_date" in changes:
            invitation.event_date = changes["event_date"]
        if "plus_one" in changes:
            invitation.plus_one = changes["plus_one"]

        self.store.save(invitation)
        log.info("invitation updated: id=%s fields=%s", invitation_id, sorted(fields))
        return invitation

    def set_status(self, invitation_id: str, status: Optional[StatusLike]) -> Invitation:
        if _is_blank(status):
            raise ValidationError("status_required", ["status"], "RSVP status is required")
        requested = parse_status(status)

        invitation = self.get(invitation_id)
        previous = invitation.status
        # check before bumping updated_at so a rejected write leaves the row as is
        self._check_transition(previous, requested)

        now = self._touch(invitation)
        self._apply_status(invitation, requested, now)
        self.store.save(invitation)
        log.info("rsvp status: id=%s %s -> %s", invitation_id, previous.value, requested.value)
        return invitation

    def delete(self, invitation_id: str) -> bool:
        deleted = self.store.delete(invitation_id)
        if deleted:
            log.info("invitation deleted: id=%s", invitation_id)
        return deleted

    # ---------- dashboard ----------

    def metrics(self) -> Dict[str, int]:
        """
        Aggregates over the current store contents.
        attendance_rate = confirmed / total * 100 rounded half up, 0 for an
        empty store. Rescinded invitations are part of total only.
        """
        counts = self.store.count_by_status()
        total = sum(counts.values())
        confirmed = counts[RsvpStatus.confirmed]
        return {
            "total": total,
            "confirmed_count": confirmed,
            "pending_count": counts[RsvpStatus.pending],
            "declined_count": counts[RsvpStatus.declined],
            "rescinded_count": counts[RsvpStatus.rescinded],
            "attendance_rate": attendance_rate(confirmed, total),
        }

    def recent_status_updates(
        self,
        limit: int = STATUS_FEED_LIMIT,
        only_status_changes: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Latest writes first. By default any write counts (ordered by
        updated_at); with only_status_changes just the invitations whose
        status actually moved, ordered by when it moved.
        """
        if limit <= 0:
            return []
        if only_status_changes:
            rows = self.store.recent_by_status_change(limit)
            stamp = "status_changed_at"
        else:
            rows = self.store.recent_by_updated(limit)
            stamp = "updated_at"
        return [
            {"id": r.id, "name": r.name, "status": r.status, "timestamp": getattr(r, stamp)}
            for r in rows
        ]

    def admin_invitations(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": inv.id,
                "name": inv.name,
                "event_date": inv.event_date,
                "venue": inv.venue,
                "status": inv.status,
                "has_qr_code": bool(inv.qr_code),
                "qr_code": inv.qr_code or None,
                "plus_one": inv.plus_one,
                "created_at": inv.created_at,
                "updated_at": inv.updated_at,
            }
            for inv in self.store.list_all()
        ]


def attendance_rate(confirmed: int, total: int) -> int:
    if total <= 0:
        return 0
    rate = Decimal(confirmed * 100) / Decimal(total)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
