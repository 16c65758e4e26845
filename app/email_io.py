# ================================
# FILE: app/email_io.py
# ================================
import html
import logging
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To, Content

from app import config
from app.deadlines import file_claim_url
from app.errors import NotificationError

log = logging.getLogger("uvicorn.error").getChild("email_io")

def _sg():
    if not config.SENDGRID_API_KEY:
        raise NotificationError("Missing SENDGRID_API_KEY")
    return SendGridAPIClient(config.SENDGRID_API_KEY)

def _extract_msg_id(resp) -> str | None:
    headers = getattr(resp, "headers", {}) or {}
    try:
        return headers.get("X-Message-Id") or headers.get("x-message-id")
    except AttributeError:
        return None

def send_html_email(to_email: str, subject: str, html_body: str) -> str | None:
    """Send one HTML message. Returns the SendGrid message id (if present).

    Raises NotificationError when SendGrid is not configured or rejects the send.
    """
    msg = Mail(
        from_email=Email(config.FROM_EMAIL),
        to_emails=[To(to_email)],
        subject=subject,
        html_content=Content("text/html", html_body),
    )
    if config.REPLY_TO_EMAIL:
        msg.reply_to = Email(config.REPLY_TO_EMAIL)

    try:
        resp = _sg().send(msg)
    except NotificationError:
        raise
    except Exception as e:
        raise NotificationError(f"SendGrid send failed: {e}") from e

    status = getattr(resp, "status_code", None)
    if status is not None and not 200 <= int(status) < 300:
        raise NotificationError(f"SendGrid returned status {status}")

    msg_id = _extract_msg_id(resp)
    log.info("[email] sent %r to %s status=%s sg_msg_id=%s", subject, to_email, status, msg_id)
    return msg_id


def render_deadline_reminder(event, remaining: int) -> tuple[str, str]:
    """Subject and HTML body for a filing-deadline reminder."""
    subject = f"Insurance Claim Deadline: {remaining} Days Remaining"
    link = file_claim_url(event.id)
    body = f"""<!doctype html>
<html>
  <body style="font-family:Arial,Helvetica,sans-serif; line-height:1.4; color:#222; font-size:14px;">
    <h1>Claim Filing Deadline Reminder</h1>
    <p>This is a reminder that your insurance claim deadline is approaching.</p>
    <p><strong>Days Remaining:</strong> {remaining}</p>
    <p><strong>Event Type:</strong> {html.escape(str(event.event_type))}</p>
    <p><strong>Event Date:</strong> {event.event_date.isoformat()}</p>
    <p><strong>Deadline:</strong> {event.deadline_60_days.isoformat()}</p>
    <p><a href="{html.escape(link)}">File Your Claim Now</a></p>
  </body>
</html>"""
    return subject, body


def get_email_sender():
    """FastAPI dependency for the outbound mail function (overridden in tests)."""
    return send_html_email
