# ================================
# FILE: app/utils.py
# ================================
from datetime import date, datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def today_utc() -> date:
    return utcnow().date()

def normalize(text: str | None) -> str:
    return text.strip() if text else ""

def blank_to_none(text: str | None) -> str | None:
    """Form inputs post '' for untouched optional fields."""
    s = normalize(text)
    return s or None