# =============================
# FILE: app/routes_auth.py
# =============================
import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.auth import get_password_hash, verify_password, create_access_token
from app.database import get_db
from app.models import User
from app.schemas import RegisterRequest

log = logging.getLogger("uvicorn.error").getChild("routes_auth")

router = APIRouter(tags=["auth"])

@router.post("/register")
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    existing = db.query(User).filter(User.username == req.username).first()
    if existing:
        raise HTTPException(status_code=400, detail="Username already exists")
    user = User(username=req.username,
                hashed_password=get_password_hash(req.password),
                email=req.email)
    db.add(user); db.commit(); db.refresh(user)
    log.info("[auth] registered user id=%s", user.id)
    return {"msg": "User registered successfully", "user_id": user.id}

@router.post("/token")
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(data={"sub": user.username})
    return {"access_token": token, "token_type": "bearer"}
