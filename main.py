# ================================
# FILE: main.py
# ================================
import sys, logging
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse, JSONResponse
from pathlib import Path
from dotenv import load_dotenv

root_env = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=root_env, override=True)

logging.basicConfig(stream=sys.stdout, level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(name).setLevel(logging.INFO)

from app.errors import ClaimsError

log = logging.getLogger("uvicorn.error").getChild("main")

app = FastAPI(title="SnapAsset Claims Backend - deadlines, proof of loss, jumpstart")

from app.routes_auth import router as auth_router
from app.routes_loss_events import router as loss_events_router
from app.routes_proof_of_loss import router as proof_of_loss_router
from app.routes_jumpstart import router as jumpstart_router
from app.routes_admin import router as admin_router

app.include_router(auth_router)
app.include_router(loss_events_router)
app.include_router(proof_of_loss_router)
app.include_router(jumpstart_router)
app.include_router(admin_router)


@app.exception_handler(ClaimsError)
def claims_error_handler(request: Request, exc: ClaimsError):
    if exc.status_code >= 500:
        log.warning("[error] %s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


@app.get("/healthz", tags=["ops"])
def healthz():
    from app.database import engine
    status = {"ok": True, "db": False, "error": None}
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("select 1")
        status["db"] = True
    except Exception as e:
        status["error"] = str(e)
    return JSONResponse(status, headers={"Cache-Control": "no-store"})

@app.get("/ping", tags=["ops"])
def ping():
    return {"pong": True}


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs", status_code=302)
