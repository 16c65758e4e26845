# ================================
# FILE: app/deadlines.py
# ================================
"""
Filing-deadline arithmetic shared by loss events, the reminder scan and the
deadline banner.

Most homeowner policies want the claim filed within 60 days of discovering
the loss, so the deadline is anchored on discovery_date, never event_date.
"""
from datetime import date, timedelta
from typing import Iterable

from app.config import APP_BASE_URL

FILING_DEADLINE_DAYS = 60

URGENT_DAYS = 7
WARNING_DAYS = 30


def compute_deadline(discovery_date: date) -> date:
    return discovery_date + timedelta(days=FILING_DEADLINE_DAYS)


def days_remaining(deadline: date, today: date) -> int:
    return (deadline - today).days


def warning_level(remaining: int) -> str:
    if remaining <= URGENT_DAYS:
        return "urgent"
    if remaining <= WARNING_DAYS:
        return "warning"
    return "info"


def file_claim_url(loss_event_id: int) -> str:
    return f"{APP_BASE_URL}/proof-of-loss?eventId={loss_event_id}"


def deadline_warning(event, today: date) -> dict:
    """Banner payload for a loss event as seen on `today`."""
    remaining = days_remaining(event.deadline_60_days, today)
    level = warning_level(remaining)
    prefix = "URGENT: " if level == "urgent" else ""
    if remaining >= 0:
        message = (
            f"{prefix}You have {remaining} days remaining to file your "
            f"{event.event_type} claim from {event.event_date.isoformat()}."
        )
    else:
        message = (
            f"{prefix}The 60-day filing deadline for your {event.event_type} claim "
            f"passed on {event.deadline_60_days.isoformat()}."
        )
    return {
        "loss_event_id": event.id,
        "days_remaining": remaining,
        "level": level,
        "overdue": remaining < 0,
        "message": message,
        "file_claim_url": file_claim_url(event.id),
    }


def due_threshold(
    remaining: int,
    fired: Iterable[int],
    thresholds: Iterable[int],
    catch_up: bool = True,
) -> tuple[int | None, list[int]]:
    """
    Decide which reminder (if any) is owed for an event `remaining` days out.

    Returns (threshold_to_send, thresholds_to_mark). With catch_up, the
    tightest crossed threshold is sent and every larger unfired threshold it
    supersedes is marked with it, so a missed scan yields one reminder, not a
    burst. Without catch_up only an exact day match qualifies.
    """
    if remaining < 0:
        return None, []
    fired = set(fired)
    pending = [t for t in thresholds if t not in fired]

    if not catch_up:
        if remaining in pending:
            return remaining, [remaining]
        return None, []

    crossed = sorted((t for t in pending if remaining <= t), reverse=True)
    if not crossed:
        return None, []
    return crossed[-1], crossed
