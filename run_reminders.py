# run_reminders.py
# Cron entry point for hosts that run the scan directly instead of calling
# POST /admin/deadline_reminders. Usage: python run_reminders.py [YYYY-MM-DD]
import sys, logging
from datetime import date
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(stream=sys.stdout, level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

from app.database import SessionLocal
from app.reminders import scan_for_reminders

log = logging.getLogger("uvicorn.error").getChild("run_reminders")


def main(argv: list[str]) -> int:
    today = date.fromisoformat(argv[1]) if len(argv) > 1 else None
    db = SessionLocal()
    try:
        result = scan_for_reminders(db, today=today)
    finally:
        db.close()
    log.info("[cron] reminders_count=%d failures=%d", result.reminders_count, len(result.failures))
    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
