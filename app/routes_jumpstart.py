# ================================
# FILE: app/routes_jumpstart.py
# ================================
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import jumpstart
from app.auth import get_current_user
from app.database import get_db
from app.jumpstart_prompts import JUMPSTART_MODES
from app.models import User
from app.schemas import JumpstartStart, PromptComplete

log = logging.getLogger("uvicorn.error").getChild("routes_jumpstart")
router = APIRouter(prefix="/jumpstart", tags=["jumpstart"])


@router.get("/modes")
def list_modes():
    return {"modes": [m.as_dict() for m in JUMPSTART_MODES]}


@router.post("/sessions")
def start(
    req: JumpstartStart,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return jumpstart.session_view(jumpstart.start_session(db, current_user, req.mode))


@router.get("/sessions/active")
def active(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    session = jumpstart.resume_active_session(db, current_user)
    return {"session": jumpstart.session_view(session) if session else None}


@router.post("/sessions/{session_id}/prompts/complete")
def complete_prompt(
    session_id: int,
    req: PromptComplete,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    session = jumpstart.complete_prompt(db, current_user, session_id, req.asset_id, req.value)
    return jumpstart.session_view(session)


@router.post("/sessions/{session_id}/prompts/skip")
def skip_prompt(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return jumpstart.session_view(jumpstart.skip_prompt(db, current_user, session_id))


@router.post("/sessions/{session_id}/complete")
def complete_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return jumpstart.session_view(jumpstart.complete_session(db, current_user, session_id))


@router.post("/sessions/{session_id}/skip")
def skip_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return jumpstart.session_view(jumpstart.skip_session(db, current_user, session_id))
