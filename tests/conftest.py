"""Shared fixtures: in-memory database, fake e-mail sender and an HTTP client."""
import os

os.environ.setdefault("TESTING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "testing")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from shop_accounts.api.dependencies import get_email_service
from shop_accounts.core.security import get_password_hash, utcnow
from shop_accounts.db.database import SessionLocal, engine
from shop_accounts.db.models import Base
from shop_accounts.domain.enums import UserRole
from shop_accounts.infrastructure.orm import CartModel, UserModel, UserDocumentModel
from shop_accounts.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from shop_accounts.main import app

NOW = datetime(2026, 1, 15, 12, 0, 0)

ALL_DOCUMENTS = ("Identification", "Proof of address", "Proof of account status")


class FakeEmailService:
    """Records outgoing mail; addresses in ``failing`` report a delivery failure."""

    def __init__(self):
        self.sent = []
        self.failing = set()

    async def send_password_reset_email(self, to_email, first_name, reset_token):
        return self._record("reset", to_email, reset_token)

    async def send_inactive_account_email(self, to_email, first_name):
        return self._record("inactive", to_email, None)

    def _record(self, kind, to_email, payload):
        if to_email in self.failing:
            return False
        self.sent.append((kind, to_email, payload))
        return True

    def tokens_for(self, to_email):
        return [payload for kind, to, payload in self.sent if kind == "reset" and to == to_email]


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow(db_session):
    return UnitOfWorkImpl(db_session)


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def make_user(db_session):
    def _make(
        email="ana@example.com",
        password="secret1",
        role=UserRole.USER,
        last_connection=None,
        documents=(),
        first_name="Ana",
        last_name="Lopez",
        age=30,
    ):
        cart = CartModel()
        db_session.add(cart)
        db_session.flush()

        user = UserModel(
            email=email,
            hashed_password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            age=age,
            role=role,
            cart_id=cart.id,
            last_connection=last_connection or utcnow(),
        )
        user.documents = [
            UserDocumentModel(name=name, reference=f"/uploads/{name}.pdf") for name in documents
        ]
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def fetch_user(db_session):
    def _fetch(email):
        db_session.expire_all()
        return db_session.query(UserModel).filter(UserModel.email == email).first()

    return _fetch


@pytest.fixture
def client(email_service):
    app.dependency_overrides[get_email_service] = lambda: email_service
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()
