# ================================
# FILE: app/routes_loss_events.py
# ================================
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_current_user
from app.database import get_db
from app.deadlines import deadline_warning
from app.loss_events import (
    close_loss_event, create_loss_event, get_loss_event, list_loss_events, serialize_loss_event,
)
from app.models import LossEventStatus, User
from app.schemas import LossEventCreate
from app.utils import today_utc

log = logging.getLogger("uvicorn.error").getChild("routes_loss_events")
router = APIRouter(tags=["loss_events"])


def _with_warning(event, today) -> dict:
    out = serialize_loss_event(event)
    out["deadline_warning"] = (
        deadline_warning(event, today) if event.status == LossEventStatus.active.value else None
    )
    return out


@router.post("/loss_events")
def create_event(
    req: LossEventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event = create_loss_event(db, current_user, req)
    return {
        "msg": f"Loss event created. Your 60-day filing deadline is {event.deadline_60_days.isoformat()}",
        "loss_event": _with_warning(event, today_utc()),
    }


@router.get("/loss_events")
def list_events(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    today = today_utc()
    return {"loss_events": [_with_warning(e, today) for e in list_loss_events(db, current_user)]}


@router.get("/loss_events/{loss_event_id}")
def get_event(
    loss_event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _with_warning(get_loss_event(db, current_user, loss_event_id), today_utc())


@router.post("/loss_events/{loss_event_id}/close")
def close_event(
    loss_event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _with_warning(close_loss_event(db, current_user, loss_event_id), today_utc())
