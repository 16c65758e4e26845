# ================================
# FILE: app/reminders.py
# ================================
"""
Filing-deadline reminder scan.

Runs as a stateless batch (cron hits POST /admin/deadline_reminders or runs
run_reminders.py). Each active loss event gets at most one email per
threshold in app.config.REMINDER_THRESHOLDS. Thresholds are claimed by
inserting loss_event_reminders rows before the send; the unique
(loss_event_id, threshold_days) constraint keeps two overlapping scans from
both mailing the same threshold. A failed send rolls its claim back so the
next scan retries it.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import config
from app.deadlines import days_remaining, due_threshold
from app.email_io import render_deadline_reminder, send_html_email
from app.errors import NotificationError
from app.models import LossEvent, LossEventReminder, LossEventStatus
from app.utils import today_utc, utcnow

log = logging.getLogger("uvicorn.error").getChild("reminders")

SendFn = Callable[[str, str, str], "str | None"]


@dataclass
class ReminderScanResult:
    today: date
    checked: int = 0
    sent: list[dict] = field(default_factory=list)
    failures: list[dict] = field(default_factory=list)
    already_claimed: int = 0

    @property
    def reminders_count(self) -> int:
        return len(self.sent)

    def as_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "checked": self.checked,
            "reminders_count": self.reminders_count,
            "sent": self.sent,
            "failures": self.failures,
            "already_claimed": self.already_claimed,
        }


def _candidate_ids(db: Session, today: date, horizon: date) -> list[int]:
    rows = (
        db.query(LossEvent.id)
        .filter(
            LossEvent.status == LossEventStatus.active.value,
            LossEvent.deadline_60_days >= today,
            LossEvent.deadline_60_days <= horizon,
        )
        .order_by(LossEvent.deadline_60_days.asc(), LossEvent.id.asc())
        .all()
    )
    return [r.id for r in rows]


def _remind_one(
    db: Session,
    event: LossEvent,
    today: date,
    send: SendFn,
    thresholds: tuple[int, ...],
    catch_up: bool,
    result: ReminderScanResult,
) -> None:
    remaining = days_remaining(event.deadline_60_days, today)
    fired = [r.threshold_days for r in event.reminders]
    threshold, to_mark = due_threshold(remaining, fired, thresholds, catch_up=catch_up)
    if threshold is None:
        return

    now = utcnow()
    markers = [
        LossEventReminder(
            loss_event_id=event.id,
            threshold_days=t,
            days_remaining=remaining,
            sent_at=now,
        )
        for t in to_mark
    ]
    try:
        db.add_all(markers)
        db.flush()
    except IntegrityError:
        db.rollback()
        result.already_claimed += 1
        log.info("[reminders] event=%s threshold=%s already claimed by another scan", event.id, threshold)
        return

    try:
        recipient = event.user.email if event.user else None
        if not recipient:
            raise NotificationError(f"No email address for user {event.user_id}")

        subject, body = render_deadline_reminder(event, remaining)
        msg_id = send(recipient, subject, body)

        for m in markers:
            m.sg_message_id = msg_id
        event.deadline_notified = True
        db.commit()
    except Exception as e:
        # isolate: one bad event must not stop the batch
        db.rollback()
        log.warning("[reminders] event=%s threshold=%s failed: %s", event.id, threshold, e)
        result.failures.append({"loss_event_id": event.id, "threshold_days": threshold, "error": str(e)})
        return

    log.info("[reminders] sent event=%s threshold=%s days_remaining=%s to=%s",
             event.id, threshold, remaining, recipient)
    result.sent.append({
        "loss_event_id": event.id,
        "threshold_days": threshold,
        "days_remaining": remaining,
        "recipient": recipient,
        "sg_msg_id": msg_id,
    })


def scan_for_reminders(
    db: Session,
    today: date | None = None,
    send: SendFn | None = None,
    thresholds: Iterable[int] | None = None,
    catch_up: bool | None = None,
) -> ReminderScanResult:
    """
    Check every active loss event against the reminder thresholds and email
    the owners that are due. Events are processed one at a time; failures are
    logged and reported in the result, never raised.
    """
    today = today or today_utc()
    send = send or send_html_email
    thresholds = tuple(sorted(set(thresholds), reverse=True)) if thresholds is not None else config.REMINDER_THRESHOLDS
    catch_up = config.REMINDER_CATCH_UP if catch_up is None else catch_up

    result = ReminderScanResult(today=today)
    if not thresholds:
        return result

    horizon = today + timedelta(days=max(thresholds))
    event_ids = _candidate_ids(db, today, horizon)
    log.info("[reminders] scan today=%s catch_up=%s candidates=%d", today, catch_up, len(event_ids))

    for event_id in event_ids:
        event = db.get(LossEvent, event_id)
        if event is None:
            continue
        result.checked += 1
        _remind_one(db, event, today, send, thresholds, catch_up, result)

    log.info("[reminders] done today=%s sent=%d failed=%d claimed_elsewhere=%d",
             today, result.reminders_count, len(result.failures), result.already_claimed)
    return result
