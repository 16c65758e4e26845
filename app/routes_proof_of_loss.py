# ================================
# FILE: app/routes_proof_of_loss.py
# ================================
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.auth import get_current_user
from app.database import get_db
from app.models import User
from app.proof_of_loss import generate_proof_of_loss, get_proof_of_loss, serialize_form
from app.schemas import ProofOfLossRequest

log = logging.getLogger("uvicorn.error").getChild("routes_proof_of_loss")
router = APIRouter(tags=["proof_of_loss"])


@router.post("/proof_of_loss")
def submit_proof_of_loss(
    req: ProofOfLossRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form, packet = generate_proof_of_loss(db, current_user, req.loss_event_id, req.form_data)
    return {
        "success": True,
        "form_id": form.id,
        "message": "Proof of Loss form submitted successfully",
        "packet": packet,
    }


@router.get("/proof_of_loss/{loss_event_id}")
def read_proof_of_loss(
    loss_event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = get_proof_of_loss(db, current_user, loss_event_id)
    if not form:
        raise HTTPException(status_code=404, detail="No proof of loss submitted for this event")
    return serialize_form(form)
