# test_loss_events.py
from datetime import date

import pytest

from app.errors import AuthorizationError, NotFoundError, ValidationError
from app.loss_events import close_loss_event, create_loss_event, get_loss_event, list_loss_events
from app.models import LossEvent
from app.schemas import LossEventCreate


def _req(**overrides):
    data = dict(
        event_type="fire",
        event_date=date(2024, 12, 30),
        discovery_date=date(2025, 1, 1),
        description="Kitchen fire spread to the living room",
    )
    data.update(overrides)
    return LossEventCreate(**data)


def test_create_sets_deadline_and_defaults(db, user):
    event = create_loss_event(db, user, _req(police_report_number="  ", estimated_total_loss=12500.0))
    assert event.id is not None
    assert event.deadline_60_days == date(2025, 3, 2)
    assert event.status == "active"
    assert event.deadline_notified is False
    assert event.police_report_number is None
    assert event.estimated_total_loss == 12500.0

def test_deadline_ignores_event_date(db, user):
    a = create_loss_event(db, user, _req(event_date=date(2024, 6, 1)))
    b = create_loss_event(db, user, _req(event_date=date(2024, 12, 31)))
    assert a.deadline_60_days == b.deadline_60_days == date(2025, 3, 2)

@pytest.mark.parametrize("field", ["event_type", "event_date", "discovery_date", "description"])
def test_required_fields(db, user, field):
    blank = "   " if field in ("event_type", "description") else None
    with pytest.raises(ValidationError) as exc:
        create_loss_event(db, user, _req(**{field: blank}))
    assert field in str(exc.value)
    assert db.query(LossEvent).count() == 0

def test_unknown_event_type(db, user):
    with pytest.raises(ValidationError):
        create_loss_event(db, user, _req(event_type="meteor"))

def test_discovery_before_event_rejected(db, user):
    with pytest.raises(ValidationError):
        create_loss_event(db, user, _req(event_date=date(2025, 1, 5), discovery_date=date(2025, 1, 1)))

def test_negative_loss_rejected(db, user):
    with pytest.raises(ValidationError):
        create_loss_event(db, user, _req(estimated_total_loss=-1))

def test_requires_user(db):
    with pytest.raises(AuthorizationError):
        create_loss_event(db, None, _req())

def test_property_must_belong_to_user(db, user, other_user, home):
    with pytest.raises(NotFoundError):
        create_loss_event(db, other_user, _req(property_id=home.id))
    event = create_loss_event(db, user, _req(property_id=home.id))
    assert event.property_id == home.id

def test_rows_are_scoped_to_owner(db, user, other_user):
    event = create_loss_event(db, user, _req())
    assert [e.id for e in list_loss_events(db, user)] == [event.id]
    assert list_loss_events(db, other_user) == []
    with pytest.raises(NotFoundError):
        get_loss_event(db, other_user, event.id)

def test_close_keeps_deadline(db, user):
    event = create_loss_event(db, user, _req())
    closed = close_loss_event(db, user, event.id)
    assert closed.status == "closed"
    assert closed.deadline_60_days == date(2025, 3, 2)

@pytest.mark.parametrize("amount", [float("nan"), float("inf")])
def test_non_finite_loss_rejected(db, user, amount):
    # model_construct skips pydantic, as an internal caller might
    req = LossEventCreate.model_construct(**{**_req().model_dump(), "estimated_total_loss": amount})
    with pytest.raises(ValidationError):
        create_loss_event(db, user, req)
    assert db.query(LossEvent).count() == 0
