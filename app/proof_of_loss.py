# ================================
# FILE: app/proof_of_loss.py
# ================================
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.assets import asset_snapshot, list_property_assets
from app.errors import AuthorizationError, ValidationError
from app.loss_events import get_loss_event, serialize_loss_event
from app.models import ProofOfLossForm, User
from app.schemas import ProofOfLossFormData
from app.utils import blank_to_none, normalize, utcnow

log = logging.getLogger("uvicorn.error").getChild("proof_of_loss")

DEFAULT_SWORN_STATEMENT = (
    "I, the undersigned, hereby swear and affirm that the information provided in this "
    "Proof of Loss is true and accurate to the best of my knowledge. The losses claimed "
    "represent actual damages sustained, and I have provided complete documentation of "
    "all affected property."
)


def validate_form_data(loss_event_id: int | None, form: ProofOfLossFormData) -> None:
    if loss_event_id is None:
        raise ValidationError("No loss event ID provided")
    if not normalize(form.signature_data):
        raise ValidationError("Please provide your signature")
    missing = [name for name, value in (
        ("insurerName", form.insurer_name),
        ("policyNumber", form.policy_number),
        ("swornStatement", form.sworn_statement),
    ) if not normalize(value)]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def _find_form(db: Session, user_id: int, loss_event_id: int) -> ProofOfLossForm | None:
    return db.query(ProofOfLossForm).filter(
        ProofOfLossForm.user_id == user_id,
        ProofOfLossForm.loss_event_id == loss_event_id,
    ).first()


def _upsert_form(db: Session, user_id: int, loss_event_id: int, values: dict) -> ProofOfLossForm:
    row = _find_form(db, user_id, loss_event_id)
    if row is None:
        row = ProofOfLossForm(user_id=user_id, loss_event_id=loss_event_id, revision=1, **values)
        db.add(row)
        try:
            db.commit()
            return row
        except IntegrityError:
            # a concurrent first submission won uq_pol_user_event; overwrite it
            db.rollback()
            row = _find_form(db, user_id, loss_event_id)
            if row is None:
                raise
    for k, v in values.items():
        setattr(row, k, v)
    row.revision = (row.revision or 1) + 1
    db.commit()
    return row


def generate_proof_of_loss(
    db: Session,
    user: User | None,
    loss_event_id: int | None,
    form: ProofOfLossFormData,
) -> tuple[ProofOfLossForm, dict]:
    """
    Submit a proof of loss for one of the user's loss events.

    The form row is keyed by (user, loss event): a resubmission overwrites the
    previous signature and answers and bumps `revision`. Returns the row and
    the claim packet (event, asset snapshot at submission time, totals).
    """
    if user is None:
        raise AuthorizationError("Unauthorized")
    validate_form_data(loss_event_id, form)

    event = get_loss_event(db, user, loss_event_id)
    assets = list_property_assets(db, user, event.property_id)

    now = utcnow()
    payload = form.model_dump(by_alias=True)
    values = dict(
        insurer_name=normalize(form.insurer_name),
        policy_number=normalize(form.policy_number),
        claim_number=blank_to_none(form.claim_number),
        sworn_statement_text=form.sworn_statement.strip(),
        signature_data=form.signature_data,
        signature_date=now,
        form_data=payload,
        status="submitted",
        submitted_at=now,
    )

    try:
        row = _upsert_form(db, user.id, event.id, values)
        db.refresh(row)
    except Exception:
        db.rollback()
        raise

    snapshots = [asset_snapshot(a) for a in assets]
    packet = {
        "form_id": row.id,
        "revision": row.revision,
        "loss_event": serialize_loss_event(event),
        "assets": snapshots,
        "asset_count": len(snapshots),
        "total_estimated_value": round(sum(a["estimated_value"] or 0 for a in snapshots), 2),
        "form_data": {k: v for k, v in payload.items() if k != "signatureData"},
        "generated_at": now.isoformat(),
    }
    log.info("[pol] submitted form=%s event=%s rev=%s assets=%d",
             row.id, event.id, row.revision, len(snapshots))
    return row, packet


def get_proof_of_loss(db: Session, user: User, loss_event_id: int) -> ProofOfLossForm | None:
    get_loss_event(db, user, loss_event_id)
    return _find_form(db, user.id, loss_event_id)


def serialize_form(row: ProofOfLossForm) -> dict:
    return {
        "id": row.id,
        "loss_event_id": row.loss_event_id,
        "insurer_name": row.insurer_name,
        "policy_number": row.policy_number,
        "claim_number": row.claim_number,
        "sworn_statement_text": row.sworn_statement_text,
        "signature_date": row.signature_date.isoformat() if row.signature_date else None,
        "status": row.status,
        "submitted_at": row.submitted_at.isoformat() if row.submitted_at else None,
        "revision": row.revision,
    }
