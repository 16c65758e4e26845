# ================================
# FILE: app/models.py
# ================================
import enum
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Date, DateTime, Float, ForeignKey,
    UniqueConstraint, JSON, func,
)
from sqlalchemy.orm import relationship
from app.database import Base


class EventType(str, enum.Enum):
    fire = "fire"
    theft = "theft"
    flood = "flood"
    water_damage = "water_damage"
    storm = "storm"
    vandalism = "vandalism"
    other = "other"


class LossEventStatus(str, enum.Enum):
    active = "active"
    closed = "closed"


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    email = Column(String, nullable=True)   # reminders go here


class Property(Base):
    __tablename__ = 'properties'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)

    assets = relationship("Asset", back_populates="property", order_by="Asset.id")


class Asset(Base):
    __tablename__ = 'assets'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey('properties.id'), nullable=True, index=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=True)
    room = Column(String, nullable=True)
    estimated_value = Column(Float, nullable=True)
    purchase_price = Column(Float, nullable=True)

    property = relationship("Property", back_populates="assets")
    photos = relationship("AssetPhoto", back_populates="asset", order_by="AssetPhoto.id")


class AssetPhoto(Base):
    __tablename__ = 'asset_photos'
    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, ForeignKey('assets.id'), nullable=False, index=True)
    storage_path = Column(String, nullable=False)   # object-store key, not the bytes
    is_primary = Column(Boolean, nullable=False, default=False)

    asset = relationship("Asset", back_populates="photos")


class LossEvent(Base):
    __tablename__ = 'loss_events'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey('properties.id'), nullable=True)

    event_type = Column(String, nullable=False)
    event_date = Column(Date, nullable=False)
    discovery_date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)
    police_report_number = Column(String, nullable=True)
    fire_department_report = Column(String, nullable=True)
    estimated_total_loss = Column(Float, nullable=True)

    status = Column(String, nullable=False, default=LossEventStatus.active.value, index=True)
    # discovery_date + 60 days, set once on insert
    deadline_60_days = Column(Date, nullable=False, index=True)
    # true once any reminder went out; per-threshold state lives in loss_event_reminders
    deadline_notified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User")
    property = relationship("Property")
    reminders = relationship("LossEventReminder", back_populates="loss_event", order_by="LossEventReminder.id")


class LossEventReminder(Base):
    __tablename__ = 'loss_event_reminders'
    __table_args__ = (UniqueConstraint('loss_event_id', 'threshold_days', name='uq_loss_event_threshold'),)

    id = Column(Integer, primary_key=True, index=True)
    loss_event_id = Column(Integer, ForeignKey('loss_events.id'), nullable=False, index=True)
    threshold_days = Column(Integer, nullable=False)
    days_remaining = Column(Integer, nullable=False)     # at send time
    sg_message_id = Column(String, nullable=True)
    sent_at = Column(DateTime(timezone=True), nullable=False)

    loss_event = relationship("LossEvent", back_populates="reminders")


class ProofOfLossForm(Base):
    __tablename__ = 'proof_of_loss_forms'
    __table_args__ = (UniqueConstraint('user_id', 'loss_event_id', name='uq_pol_user_event'),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    loss_event_id = Column(Integer, ForeignKey('loss_events.id'), nullable=False, index=True)

    insurer_name = Column(String, nullable=False)
    policy_number = Column(String, nullable=False)
    claim_number = Column(String, nullable=True)
    sworn_statement_text = Column(Text, nullable=False)
    signature_data = Column(Text, nullable=False)        # data: URL from the signature pad
    signature_date = Column(DateTime(timezone=True), nullable=False)

    form_data = Column(JSON, nullable=False)
    status = Column(String, nullable=False, default="submitted")
    submitted_at = Column(DateTime(timezone=True), nullable=False)
    revision = Column(Integer, nullable=False, default=1)

    loss_event = relationship("LossEvent")


class JumpstartSession(Base):
    __tablename__ = 'jumpstart_sessions'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    mode = Column(String, nullable=False)

    started_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    items_target = Column(Integer, nullable=False)
    items_completed = Column(Integer, nullable=False, default=0)
    total_value = Column(Float, nullable=False, default=0.0)
    completed = Column(Boolean, nullable=False, default=False)
    skipped = Column(Boolean, nullable=False, default=False)

    prompts = relationship(
        "JumpstartPrompt",
        back_populates="session",
        order_by="JumpstartPrompt.prompt_index",
        cascade="all, delete-orphan",
    )


class JumpstartPrompt(Base):
    __tablename__ = 'jumpstart_prompts'
    __table_args__ = (UniqueConstraint('session_id', 'prompt_index', name='uq_jumpstart_prompt_index'),)

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey('jumpstart_sessions.id'), nullable=False, index=True)
    prompt_index = Column(Integer, nullable=False)
    prompt_id = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    skipped = Column(Boolean, nullable=False, default=False)
    asset_id = Column(Integer, ForeignKey('assets.id'), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    session = relationship("JumpstartSession", back_populates="prompts")

    @property
    def pending(self) -> bool:
        return not (self.completed or self.skipped)
