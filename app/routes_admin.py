# ================================
# FILE: app/routes_admin.py
# ================================
import logging
from datetime import date
from fastapi import APIRouter, Query, HTTPException, Depends, Header
from sqlalchemy.orm import Session

from app import config
from app.database import get_db
from app.email_io import get_email_sender
from app.reminders import scan_for_reminders

router = APIRouter(tags=["admin"])
log = logging.getLogger("uvicorn.error").getChild("routes_admin")


def require_admin(x_admin_token: str | None = Header(default=None)):
    if not config.ADMIN_TOKEN:
        raise HTTPException(status_code=503, detail="ADMIN_TOKEN is not configured")
    if x_admin_token != config.ADMIN_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid admin token")


@router.post("/admin/deadline_reminders", dependencies=[Depends(require_admin)])
def run_deadline_reminders(
    today: date | None = Query(default=None, description="Override scan date (backfills)"),
    db: Session = Depends(get_db),
    send=Depends(get_email_sender),
):
    """
    Cron entry point: scan active loss events and email owners whose filing
    deadline crossed a reminder threshold. Per-event failures are reported
    in the body; the call itself only fails on auth or a broken database.
    """
    result = scan_for_reminders(db, today=today, send=send)
    out = result.as_dict()
    out["success"] = True
    return out
