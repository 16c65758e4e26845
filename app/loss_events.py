# ================================
# FILE: app/loss_events.py
# ================================
import logging
import math
from sqlalchemy.orm import Session

from app.deadlines import compute_deadline
from app.errors import AuthorizationError, NotFoundError, ValidationError
from app.models import EventType, LossEvent, LossEventStatus, Property, User
from app.schemas import LossEventCreate
from app.utils import blank_to_none, normalize

log = logging.getLogger("uvicorn.error").getChild("loss_events")

EVENT_TYPES = {e.value for e in EventType}


def _validate(req: LossEventCreate) -> None:
    missing = []
    if not normalize(req.event_type):
        missing.append("event_type")
    if req.event_date is None:
        missing.append("event_date")
    if req.discovery_date is None:
        missing.append("discovery_date")
    if not normalize(req.description):
        missing.append("description")
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    if normalize(req.event_type) not in EVENT_TYPES:
        raise ValidationError(
            f"Unknown event_type {req.event_type!r}; expected one of {sorted(EVENT_TYPES)}"
        )
    if req.discovery_date < req.event_date:
        raise ValidationError("discovery_date cannot be before event_date")
    loss = req.estimated_total_loss
    if loss is not None and not (math.isfinite(loss) and loss >= 0):
        raise ValidationError("estimated_total_loss must be a finite amount, zero or more")


def create_loss_event(db: Session, user: User | None, req: LossEventCreate) -> LossEvent:
    """Validate and persist a loss event; the 60-day deadline is fixed here."""
    if user is None:
        raise AuthorizationError("Sign in to record a loss event")
    _validate(req)

    if req.property_id is not None:
        prop = db.query(Property).filter(
            Property.id == req.property_id, Property.user_id == user.id
        ).first()
        if not prop:
            raise NotFoundError(f"Property {req.property_id} not found")

    event = LossEvent(
        user_id=user.id,
        property_id=req.property_id,
        event_type=normalize(req.event_type),
        event_date=req.event_date,
        discovery_date=req.discovery_date,
        description=normalize(req.description),
        police_report_number=blank_to_none(req.police_report_number),
        fire_department_report=blank_to_none(req.fire_department_report),
        estimated_total_loss=req.estimated_total_loss,
        status=LossEventStatus.active.value,
        deadline_60_days=compute_deadline(req.discovery_date),
        deadline_notified=False,
    )
    try:
        db.add(event); db.commit(); db.refresh(event)
    except Exception:
        db.rollback()
        raise
    log.info("[loss_event] created id=%s user=%s type=%s deadline=%s",
             event.id, user.id, event.event_type, event.deadline_60_days)
    return event


def list_loss_events(db: Session, user: User) -> list[LossEvent]:
    return (
        db.query(LossEvent)
        .filter(LossEvent.user_id == user.id)
        .order_by(LossEvent.deadline_60_days.asc(), LossEvent.id.asc())
        .all()
    )


def get_loss_event(db: Session, user: User, loss_event_id: int) -> LossEvent:
    event = db.query(LossEvent).filter(
        LossEvent.id == loss_event_id, LossEvent.user_id == user.id
    ).first()
    if not event:
        raise NotFoundError(f"Loss event {loss_event_id} not found")
    return event


def close_loss_event(db: Session, user: User, loss_event_id: int) -> LossEvent:
    event = get_loss_event(db, user, loss_event_id)
    if event.status != LossEventStatus.closed.value:
        event.status = LossEventStatus.closed.value
        db.commit(); db.refresh(event)
        log.info("[loss_event] closed id=%s", event.id)
    return event


def serialize_loss_event(event: LossEvent) -> dict:
    return {
        "id": event.id,
        "user_id": event.user_id,
        "property_id": event.property_id,
        "event_type": event.event_type,
        "event_date": event.event_date.isoformat(),
        "discovery_date": event.discovery_date.isoformat(),
        "description": event.description,
        "police_report_number": event.police_report_number,
        "fire_department_report": event.fire_department_report,
        "estimated_total_loss": event.estimated_total_loss,
        "status": event.status,
        "deadline_60_days": event.deadline_60_days.isoformat(),
        "deadline_notified": event.deadline_notified,
        "reminders_sent": [r.threshold_days for r in event.reminders],
    }
