# =============================
# FILE: app/config.py
# =============================
import os, logging
from pathlib import Path
from dotenv import load_dotenv

log = logging.getLogger("uvicorn.error").getChild("config")

# Load .env from repo root (helpful locally)
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(dotenv_path=root_env, override=True)

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "")
if not DATABASE_URL:
    DATABASE_URL = "sqlite:///./snapasset_claims.db"
    log.warning("[config] DATABASE_URL not set, falling back to %s", DATABASE_URL)

# --- Core keys ---
SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
ADMIN_TOKEN      = os.getenv("ADMIN_TOKEN")

# --- Email ---
FROM_EMAIL     = os.getenv("FROM_EMAIL", "reminders@snapassetai.com")
REPLY_TO_EMAIL = os.getenv("REPLY_TO_EMAIL", "support@snapassetai.com")

# --- JWT/Auth ---
SECRET_KEY    = os.getenv("SECRET_KEY", "changeme")
ALGORITHM     = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# --- Links in outbound mail ---
APP_BASE_URL = os.getenv("APP_BASE_URL", "https://snapassetai.com").rstrip("/")

# --- Deadline reminders ---
DEFAULT_REMINDER_THRESHOLDS = (60, 45, 30, 7)


def parse_thresholds(raw: str | None) -> tuple[int, ...]:
    """
    Parse a comma separated list of day counts ("60,45,30,7").
    Returns unique positive ints sorted largest first; empty input gives the defaults.
    """
    if not raw or not raw.strip():
        return DEFAULT_REMINDER_THRESHOLDS
    days: set[int] = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            n = int(part)
        except ValueError:
            raise ValueError(f"Invalid reminder threshold {part!r}")
        if n <= 0:
            raise ValueError(f"Reminder threshold must be positive, got {n}")
        days.add(n)
    if not days:
        return DEFAULT_REMINDER_THRESHOLDS
    return tuple(sorted(days, reverse=True))


def _env_flag(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


REMINDER_THRESHOLDS = parse_thresholds(os.getenv("REMINDER_THRESHOLDS"))

# Catch-up: remind when days_remaining <= threshold (tolerates missed scans).
# Off: only on the exact threshold day.
REMINDER_CATCH_UP = _env_flag("REMINDER_CATCH_UP", True)
