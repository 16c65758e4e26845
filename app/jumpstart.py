# ================================
# FILE: app/jumpstart.py
# ================================
"""
Jumpstart guided sessions: a resumable walk through a mode's fixed prompt
list. Progress lives in jumpstart_sessions / jumpstart_prompts so a user can
close the tab and resume where they left off.

Each prompt goes pending -> completed or pending -> skipped, never back.
The current prompt is the lowest-indexed pending one. Counter updates are
issued as `col = col + delta` in SQL, and prompt updates only match rows
that are still pending, so two tabs racing on the same prompt cannot both
count it.
"""
import logging
import math
from sqlalchemy import update
from sqlalchemy.orm import Session

from app.errors import AuthorizationError, NotFoundError, StateError, ValidationError
from app.jumpstart_prompts import get_mode, prompt_dict
from app.models import Asset, JumpstartPrompt, JumpstartSession, User
from app.utils import utcnow

log = logging.getLogger("uvicorn.error").getChild("jumpstart")


def _require_user(user: User | None) -> User:
    if user is None:
        raise AuthorizationError("Please sign in to start a jumpstart session")
    return user


def start_session(db: Session, user: User | None, mode_id: str) -> JumpstartSession:
    user = _require_user(user)
    mode = get_mode(mode_id)

    try:
        session = JumpstartSession(
            user_id=user.id,
            mode=mode.id,
            started_at=utcnow(),
            items_target=mode.items,
            items_completed=0,
            total_value=0.0,
            completed=False,
            skipped=False,
        )
        db.add(session)
        db.flush()
        db.add_all([
            JumpstartPrompt(
                session_id=session.id,
                prompt_index=index,
                prompt_id=prompt.id,
                completed=False,
                skipped=False,
            )
            for index, prompt in enumerate(mode.prompts)
        ])
        db.commit(); db.refresh(session)
    except Exception:
        db.rollback()
        raise
    log.info("[jumpstart] started session=%s user=%s mode=%s prompts=%d",
             session.id, user.id, mode.id, mode.items)
    return session


def resume_active_session(db: Session, user: User | None) -> JumpstartSession | None:
    """The user's most recent session that is neither completed nor skipped."""
    user = _require_user(user)
    return (
        db.query(JumpstartSession)
        .filter(
            JumpstartSession.user_id == user.id,
            JumpstartSession.completed.is_(False),
            JumpstartSession.skipped.is_(False),
        )
        .order_by(JumpstartSession.started_at.desc(), JumpstartSession.id.desc())
        .first()
    )


def get_session(db: Session, user: User | None, session_id: int) -> JumpstartSession:
    user = _require_user(user)
    session = db.query(JumpstartSession).filter(
        JumpstartSession.id == session_id, JumpstartSession.user_id == user.id
    ).first()
    if not session:
        raise NotFoundError(f"Jumpstart session {session_id} not found")
    return session


def current_prompt_index(session: JumpstartSession) -> int:
    for p in session.prompts:
        if p.pending:
            return p.prompt_index
    return len(session.prompts)


def is_complete(session: JumpstartSession) -> bool:
    return current_prompt_index(session) >= len(session.prompts)


def progress(session: JumpstartSession) -> int:
    if not session.items_target:
        return 0
    return min(100, round(session.items_completed / session.items_target * 100))


def _require_open(session: JumpstartSession) -> None:
    if session.completed:
        raise StateError("Jumpstart session is already completed")
    if session.skipped:
        raise StateError("Jumpstart session was skipped")


def _resolve_current(db: Session, session: JumpstartSession, changes: dict) -> int:
    """Apply `changes` to the current prompt if it is still pending; return its index."""
    _require_open(session)
    index = current_prompt_index(session)
    if index >= len(session.prompts):
        raise StateError("No prompt left in this session")

    res = db.execute(
        update(JumpstartPrompt)
        .where(
            JumpstartPrompt.session_id == session.id,
            JumpstartPrompt.prompt_index == index,
            JumpstartPrompt.completed.is_(False),
            JumpstartPrompt.skipped.is_(False),
        )
        .values(**changes)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount != 1:
        db.rollback()
        raise StateError(f"Prompt {index} was already resolved")
    return index


def complete_prompt(
    db: Session,
    user: User | None,
    session_id: int,
    asset_id: int,
    value: float,
) -> JumpstartSession:
    """Mark the current prompt captured by `asset_id`; add 1 item and `value` to the session."""
    session = get_session(db, user, session_id)
    if value is None or not math.isfinite(value) or value < 0:
        raise ValidationError("value must be a finite amount, zero or more")
    asset = db.query(Asset.id).filter(Asset.id == asset_id, Asset.user_id == session.user_id).first()
    if not asset:
        raise NotFoundError(f"Asset {asset_id} not found")

    try:
        index = _resolve_current(db, session, {
            "completed": True,
            "asset_id": asset_id,
            "completed_at": utcnow(),
        })
        db.execute(
            update(JumpstartSession)
            .where(JumpstartSession.id == session.id)
            .values(
                items_completed=JumpstartSession.items_completed + 1,
                total_value=JumpstartSession.total_value + float(value),
            )
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except StateError:
        raise
    except Exception:
        db.rollback()
        raise
    db.expire_all()
    log.info("[jumpstart] session=%s prompt=%s completed asset=%s value=%.2f",
             session_id, index, asset_id, value)
    return get_session(db, user, session_id)


def skip_prompt(db: Session, user: User | None, session_id: int) -> JumpstartSession:
    """Mark the current prompt skipped. Counters are untouched."""
    session = get_session(db, user, session_id)
    try:
        index = _resolve_current(db, session, {"skipped": True, "completed_at": utcnow()})
        db.commit()
    except StateError:
        raise
    except Exception:
        db.rollback()
        raise
    db.expire_all()
    log.info("[jumpstart] session=%s prompt=%s skipped", session_id, index)
    return get_session(db, user, session_id)


def complete_session(db: Session, user: User | None, session_id: int) -> JumpstartSession:
    """Close out a session whose prompts are all resolved. Repeat calls are no-ops."""
    session = get_session(db, user, session_id)
    if session.completed:
        return session
    if session.skipped:
        raise StateError("Jumpstart session was skipped")
    if not is_complete(session):
        raise StateError(
            f"Prompt {current_prompt_index(session)} of {len(session.prompts)} is still pending"
        )
    session.completed = True
    session.completed_at = utcnow()
    db.commit(); db.refresh(session)
    log.info("[jumpstart] session=%s completed items=%s total_value=%.2f",
             session.id, session.items_completed, session.total_value)
    return session


def skip_session(db: Session, user: User | None, session_id: int) -> JumpstartSession:
    """'Skip for now': park the session so it is no longer offered for resume."""
    session = get_session(db, user, session_id)
    if session.completed:
        raise StateError("Jumpstart session is already completed")
    if not session.skipped:
        session.skipped = True
        db.commit(); db.refresh(session)
        log.info("[jumpstart] session=%s skipped by user", session.id)
    return session


def session_view(session: JumpstartSession) -> dict:
    mode = get_mode(session.mode)
    index = current_prompt_index(session)
    current = mode.prompts[index] if index < len(mode.prompts) else None
    return {
        "id": session.id,
        "mode": session.mode,
        "started_at": session.started_at.isoformat() if session.started_at else None,
        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
        "items_target": session.items_target,
        "items_completed": session.items_completed,
        "total_value": session.total_value,
        "completed": session.completed,
        "skipped": session.skipped,
        "current_prompt_index": index,
        "current_prompt": prompt_dict(current) if current else None,
        "progress": progress(session),
        "is_complete": index >= len(session.prompts),
        "prompts": [
            {
                "prompt_index": p.prompt_index,
                "prompt_id": p.prompt_id,
                "completed": p.completed,
                "skipped": p.skipped,
                "asset_id": p.asset_id,
            }
            for p in session.prompts
        ],
    }
