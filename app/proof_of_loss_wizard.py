# ================================
# FILE: app/proof_of_loss_wizard.py
# ================================
"""
Client side of the proof-of-loss filing: a three step wizard

    INSURANCE_INFO -> SWORN_STATEMENT -> SIGNATURE -> SUBMITTED

Navigation between the first three steps is free; field checks happen only
at submit. Nothing is persisted until submit succeeds, so abandoning the
wizard discards the answers.
"""
import enum
import logging
from typing import Callable

import httpx

from app.errors import StateError, ValidationError
from app.proof_of_loss import DEFAULT_SWORN_STATEMENT
from app.utils import normalize

log = logging.getLogger("uvicorn.error").getChild("pol_wizard")


class WizardStep(enum.IntEnum):
    INSURANCE_INFO = 1
    SWORN_STATEMENT = 2
    SIGNATURE = 3
    SUBMITTED = 4


# (loss_event_id, form_data) -> form id
Submitter = Callable[[int, dict], int]


class ProofOfLossWizard:
    FIELDS = ("insurerName", "policyNumber", "claimNumber", "swornStatement")

    def __init__(self, loss_event_id: int | None, submitter: Submitter):
        self.loss_event_id = loss_event_id
        self.submitter = submitter
        self.step = WizardStep.INSURANCE_INFO
        self.form_data = {
            "insurerName": "",
            "policyNumber": "",
            "claimNumber": "",
            "swornStatement": DEFAULT_SWORN_STATEMENT,
            "signatureData": "",
        }
        self.form_id: int | None = None

    @property
    def submitted(self) -> bool:
        return self.step == WizardStep.SUBMITTED

    def _require_open(self):
        if self.submitted:
            raise StateError("Proof of loss already submitted")

    def update(self, **fields) -> None:
        self._require_open()
        for k, v in fields.items():
            if k not in self.FIELDS:
                raise ValidationError(f"Unknown field {k!r}")
            self.form_data[k] = v

    def capture_signature(self, signature_data: str) -> None:
        self._require_open()
        self.form_data["signatureData"] = signature_data or ""

    def next(self) -> WizardStep:
        self._require_open()
        if self.step >= WizardStep.SIGNATURE:
            raise StateError("Already on the last step; submit instead")
        self.step = WizardStep(self.step + 1)
        return self.step

    def back(self) -> WizardStep:
        self._require_open()
        if self.step == WizardStep.INSURANCE_INFO:
            raise StateError("Already on the first step")
        self.step = WizardStep(self.step - 1)
        return self.step

    def submit(self) -> int:
        """Submit from the signature step. On failure the wizard stays put."""
        self._require_open()
        if self.step != WizardStep.SIGNATURE:
            raise StateError("Submit is only available from the signature step")
        if self.loss_event_id is None:
            raise ValidationError("No loss event ID provided")
        if not normalize(self.form_data.get("signatureData")):
            raise ValidationError("Please provide your signature")

        form_id = self.submitter(self.loss_event_id, dict(self.form_data))
        self.form_id = form_id
        self.step = WizardStep.SUBMITTED
        log.info("[pol] wizard submitted event=%s form=%s", self.loss_event_id, form_id)
        return form_id


class HttpProofOfLossSubmitter:
    """Posts the wizard payload to POST /proof_of_loss with a bearer token."""

    def __init__(self, client: httpx.Client, token: str, path: str = "/proof_of_loss"):
        self.client = client
        self.token = token
        self.path = path

    def __call__(self, loss_event_id: int, form_data: dict) -> int:
        r = self.client.post(
            self.path,
            json={"lossEventId": loss_event_id, "formData": form_data},
            headers={"Authorization": f"Bearer {self.token}"},
        )
        if r.status_code != 200:
            try:
                body = r.json()
            except ValueError:
                body = r.text[:400]
            detail = body.get("detail") if isinstance(body, dict) else body
            log.warning("[pol] submit failed status=%s detail=%s", r.status_code, detail)
            r.raise_for_status()
        return r.json()["form_id"]
