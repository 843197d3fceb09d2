from datetime import datetime, timezone

import pytest

from attendly.models.invitation import RsvpStatus
from attendly.services.errors import InvitationNotFound, ValidationError
from attendly.services.invitations import attendance_rate, parse_event_date, parse_status

EVENT = datetime(2026, 5, 23, 15, 0)


def _create(service, name="A", **kwargs):
    kwargs.setdefault("event_date", EVENT)
    kwargs.setdefault("venue", "V")
    return service.create(name=name, **kwargs)


# ---------- create / get ----------

def test_create_then_get_returns_same_fields_with_pending_default(service):
    created = _create(service, name="Sarah & John", venue="Canary World", plus_one=2)

    got = service.get(created.id)

    assert got.name == "Sarah & John"
    assert got.venue == "Canary World"
    assert got.event_date == EVENT
    assert got.plus_one == 2
    assert got.status == RsvpStatus.pending
    assert got.created_at == got.updated_at
    assert got.status_changed_at is None


def test_create_derives_qr_code_from_id(service):
    created = _create(service)
    assert created.qr_code == f"data:image/png;base64,QR-{created.id}"


def test_ids_are_unique(service):
    ids = {_create(service, name=f"guest {i}").id for i in range(20)}
    assert len(ids) == 20


def test_create_accepts_explicit_status_and_iso_string_date(service):
    created = service.create(name="B", event_date="2026-05-23T15:00", venue="V", status="confirmed")
    assert created.status == RsvpStatus.confirmed
    assert created.event_date == EVENT
    assert created.plus_one == 0


@pytest.mark.parametrize(
    "kwargs, missing",
    [
        ({"name": None, "event_date": EVENT, "venue": "V"}, ["name"]),
        ({"name": "  ", "event_date": EVENT, "venue": "V"}, ["name"]),
        ({"name": "A", "event_date": None, "venue": ""}, ["eventDate", "venue"]),
        ({"name": "", "event_date": "", "venue": None}, ["name", "eventDate", "venue"]),
    ],
)
def test_create_reports_every_missing_field(service, kwargs, missing):
    with pytest.raises(ValidationError) as exc:
        service.create(**kwargs)
    assert exc.value.code == "missing_fields"
    assert exc.value.fields == missing
    assert service.metrics()["total"] == 0


@pytest.mark.parametrize("plus_one", [-1, 11, True])
def test_create_rejects_plus_one_out_of_range(service, plus_one):
    with pytest.raises(ValidationError) as exc:
        _create(service, plus_one=plus_one)
    assert exc.value.fields == ["plusOne"]


def test_create_rejects_unknown_status(service):
    with pytest.raises(ValidationError) as exc:
        _create(service, status="maybe")
    assert exc.value.fields == ["status"]


def test_get_unknown_id_raises_not_found(service):
    with pytest.raises(InvitationNotFound):
        service.get("does-not-exist")


# ---------- update ----------

def test_update_merges_fields_and_keeps_identity(service):
    created = _create(service, plus_one=1)
    created_at = created.created_at
    before = created.updated_at

    updated = service.update(created.id, {"venue": "Garden", "plus_one": 3})

    assert updated.id == created.id
    assert updated.name == "A"
    assert updated.venue == "Garden"
    assert updated.plus_one == 3
    assert updated.created_at == created_at
    assert updated.updated_at > before


def test_update_skips_none_values(service):
    created = _create(service)
    updated = service.update(created.id, {"name": None, "venue": "New"})
    assert updated.name == "A"
    assert updated.venue == "New"


def test_update_rejects_blank_name(service):
    created = _create(service)
    with pytest.raises(ValidationError):
        service.update(created.id, {"name": ""})
    assert service.get(created.id).name == "A"


def test_update_rejects_unknown_fields(service):
    created = _create(service)
    with pytest.raises(ValidationError) as exc:
        service.update(created.id, {"id": "other"})
    assert exc.value.code == "unknown_fields"


def test_update_status_records_status_change(service):
    created = _create(service)
    updated = service.update(created.id, {"status": "declined"})
    assert updated.status == RsvpStatus.declined
    assert updated.status_changed_at == updated.updated_at


def test_update_unknown_id_raises_not_found(service):
    with pytest.raises(InvitationNotFound):
        service.update("nope", {"name": "X"})


def test_updated_at_moves_forward_even_when_clock_stands_still(db_session):
    from attendly.services.invitation_store import InvitationStore
    from attendly.services.invitations import InvitationService

    frozen = datetime(2026, 1, 1, 12, 0, 0)
    service = InvitationService(InvitationStore(db_session), qr_encoder=lambda i: "qr", clock=lambda: frozen)
    created = _create(service)

    updated = service.set_status(created.id, "confirmed")

    assert updated.updated_at > updated.created_at


# ---------- status ----------

def test_set_status_has_no_guard_in_free_mode(service):
    created = _create(service, status="declined")

    updated = service.set_status(created.id, "confirmed")

    assert updated.status == RsvpStatus.confirmed


def test_set_status_free_mode_allows_leaving_rescinded(service):
    created = _create(service, status="rescinded")
    assert service.set_status(created.id, RsvpStatus.pending).status == RsvpStatus.pending


def test_set_status_to_same_value_bumps_updated_at_only(service):
    created = _create(service)
    before = created.updated_at

    updated = service.set_status(created.id, "pending")

    assert updated.status == RsvpStatus.pending
    assert updated.updated_at > before
    assert updated.status_changed_at is None


def test_set_status_accepts_uppercase_names(service):
    created = _create(service)
    assert service.set_status(created.id, "CONFIRMED").status == RsvpStatus.confirmed


def test_set_status_requires_status(service):
    created = _create(service)
    with pytest.raises(ValidationError) as exc:
        service.set_status(created.id, None)
    assert exc.value.code == "status_required"


def test_set_status_unknown_id_raises_not_found(service):
    with pytest.raises(InvitationNotFound):
        service.set_status("nope", "confirmed")


# ---------- delete ----------

def test_delete_then_get_is_not_found(service):
    created = _create(service)

    assert service.delete(created.id) is True
    with pytest.raises(InvitationNotFound):
        service.get(created.id)


def test_delete_unknown_id_returns_false(service):
    assert service.delete("nope") is False


# ---------- metrics ----------

def test_metrics_empty_store(service):
    assert service.metrics() == {
        "total": 0,
        "confirmed_count": 0,
        "pending_count": 0,
        "declined_count": 0,
        "rescinded_count": 0,
        "attendance_rate": 0,
    }


def test_metrics_counts_rescinded_in_total_only(service):
    for status in ("confirmed", "pending", "declined", "rescinded"):
        _create(service, name=status, status=status)

    m = service.metrics()

    assert m["total"] == 4
    assert m["confirmed_count"] == 1
    assert m["pending_count"] == 1
    assert m["declined_count"] == 1
    assert m["rescinded_count"] == 1
    assert m["confirmed_count"] + m["pending_count"] + m["declined_count"] <= m["total"]
    assert m["attendance_rate"] == 25


def test_metrics_follow_status_changes(service):
    a = _create(service, name="a")
    _create(service, name="b")
    service.set_status(a.id, "confirmed")

    m = service.metrics()

    assert m["confirmed_count"] == 1
    assert m["pending_count"] == 1
    assert m["attendance_rate"] == 50


@pytest.mark.parametrize(
    "confirmed, total, expected",
    [(0, 0, 0), (1, 4, 25), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38), (5, 5, 100)],
)
def test_attendance_rate_rounds_half_up(confirmed, total, expected):
    assert attendance_rate(confirmed, total) == expected


# ---------- feed / admin table ----------

def test_recent_status_updates_ordered_by_updated_at_and_limited(service):
    created = [_create(service, name=f"g{i}") for i in range(7)]
    service.update(created[0].id, {"venue": "moved"})

    feed = service.recent_status_updates(limit=5)

    assert len(feed) == 5
    assert feed[0]["id"] == created[0].id
    assert [item["timestamp"] for item in feed] == sorted((item["timestamp"] for item in feed), reverse=True)
    assert set(feed[0]) == {"id", "name", "status", "timestamp"}


def test_recent_status_updates_only_status_changes(service):
    a = _create(service, name="a")
    b = _create(service, name="b")
    _create(service, name="c")
    service.set_status(a.id, "confirmed")
    service.update(b.id, {"venue": "elsewhere"})

    feed = service.recent_status_updates(only_status_changes=True)

    assert [item["id"] for item in feed] == [a.id]
    assert feed[0]["status"] == RsvpStatus.confirmed


def test_recent_status_updates_zero_limit(service):
    _create(service)
    assert service.recent_status_updates(limit=0) == []


def test_admin_invitations_rows(service):
    first = _create(service, name="first")
    second = service.create(name="second", event_date=EVENT, venue="V", plus_one=2)

    rows = service.admin_invitations()

    assert [r["id"] for r in rows] == [second.id, first.id]
    assert rows[0]["has_qr_code"] is True
    assert rows[0]["plus_one"] == 2


# ---------- parsing helpers ----------

def test_parse_event_date_normalizes_to_naive_utc():
    assert parse_event_date("2026-05-23T16:00:00+01:00") == EVENT
    assert parse_event_date("2026-05-23T15:00:00Z") == EVENT
    assert parse_event_date(datetime(2026, 5, 23, 15, 0, tzinfo=timezone.utc)) == EVENT


def test_parse_event_date_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_event_date("next saturday")


def test_parse_status_rejects_non_strings():
    with pytest.raises(ValidationError):
        parse_status(3)
