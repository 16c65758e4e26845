# ================================
# FILE: app/schemas.py
# ================================
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class RegisterRequest(BaseModel):
    username: str
    password: str
    email: str

class LossEventCreate(BaseModel):
    # Strings/None allowed here so the service reports missing fields itself.
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    discovery_date: Optional[date] = None
    description: Optional[str] = None
    police_report_number: Optional[str] = None
    fire_department_report: Optional[str] = None
    estimated_total_loss: Optional[float] = Field(None, allow_inf_nan=False)
    property_id: Optional[int] = None

class ProofOfLossFormData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    insurer_name: str = Field("", alias="insurerName")
    policy_number: str = Field("", alias="policyNumber")
    claim_number: Optional[str] = Field(None, alias="claimNumber")
    sworn_statement: str = Field("", alias="swornStatement")
    signature_data: str = Field("", alias="signatureData")

class ProofOfLossRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    loss_event_id: Optional[int] = Field(None, alias="lossEventId")
    form_data: ProofOfLossFormData = Field(alias="formData")

class JumpstartStart(BaseModel):
    mode: str

class PromptComplete(BaseModel):
    asset_id: int
    value: float = Field(0.0, allow_inf_nan=False)
