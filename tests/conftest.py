import os
import sys
import tempfile
from datetime import datetime, timedelta

import pytest

# Ensure repo root on sys.path for the flat module layout
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Must be set before config/database are imported
_TMP = tempfile.mkdtemp(prefix="institute-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_ROUTE"] = "control-panel"
os.environ["COOKIE_SECURE"] = "true"
os.environ["COOKIE_SAMESITE"] = "none"
os.environ.pop("COOKIE_DOMAIN", None)

from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
from models.admin import Admin  # noqa: E402
from security import hash_password  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"
BASE_URL = "https://testserver"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_user(db):
    admin = Admin(username=ADMIN_USERNAME, password_hash=hash_password(ADMIN_PASSWORD), role="ADMIN")
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def client():
    # https so the Secure session cookie is sent back
    with TestClient(app, base_url=BASE_URL) as c:
        yield c


@pytest.fixture
def admin_client(client, admin_user):
    r = client.post("/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return client


@pytest.fixture
def clock():
    """Distinct, increasing timestamps for rows whose order matters."""
    start = datetime(2026, 1, 1, 9, 0, 0)

    def at(minutes: int) -> datetime:
        return start + timedelta(minutes=minutes)

    return at
