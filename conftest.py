# conftest.py
import os

# keep app.database off disk; tests bind their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from app.auth import create_access_token, get_password_hash
from app.database import Base, get_db
from app.email_io import get_email_sender
from app.errors import NotificationError
from app.models import Asset, AssetPhoto, Property, User


class Outbox:
    """Stands in for SendGrid: records messages, fails for chosen recipients."""

    def __init__(self):
        self.sent = []
        self.fail_for = set()

    def send(self, to_email, subject, html_body):
        if to_email in self.fail_for:
            raise NotificationError(f"bounced: {to_email}")
        self.sent.append({"to": to_email, "subject": subject, "html": html_body})
        return f"sg-{len(self.sent)}"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()

@pytest.fixture
def outbox():
    return Outbox()

@pytest.fixture
def client(session_factory, outbox):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_email_sender] = lambda: outbox.send
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, username="alice", email="alice@example.com", password="s3cret"):
    user = User(username=username, hashed_password=get_password_hash(password), email=email)
    db.add(user); db.commit(); db.refresh(user)
    return user

@pytest.fixture
def user(db):
    return make_user(db)

@pytest.fixture
def other_user(db):
    return make_user(db, username="bob", email="bob@example.com")

@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.username})}"}

@pytest.fixture
def home(db, user):
    """A property with two assets (one photographed)."""
    prop = Property(user_id=user.id, name="Home", address="12 Elm St")
    db.add(prop); db.flush()
    tv = Asset(user_id=user.id, property_id=prop.id, title="OLED TV", category="electronics",
               room="Living room", estimated_value=1800.0)
    laptop = Asset(user_id=user.id, property_id=prop.id, title="Laptop", category="electronics",
                   room="Office", estimated_value=1200.5)
    db.add_all([tv, laptop]); db.flush()
    db.add(AssetPhoto(asset_id=tv.id, storage_path=f"{user.id}/tv-front.jpg", is_primary=True))
    db.commit(); db.refresh(prop)
    return prop
