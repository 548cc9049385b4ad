import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "storefront-test-secret-0123456789abcdef")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_card_provider, get_db, get_wallet_provider
from storefront.db.models import Product
from storefront.db.session import Base
from storefront.main import app
from storefront.services.providers import ProviderError


class FakeProvider:
    """Stands in for a payment provider; records every capture."""

    def __init__(self, method="stripe", fail=False):
        self.method = method
        self.fail = fail
        self.captures = []

    def capture(self, amount, credential, description):
        self.captures.append((amount, credential, description))
        if self.fail:
            raise ProviderError("card declined")
        return f"txn_{len(self.captures)}"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def products(db):
    rows = [
        Product(name="Steel Bar", category="steel", price=Decimal("10.50"), stock_quantity=100),
        Product(name="Floor Tile", category="tiles", price=Decimal("3.25"), stock_quantity=500),
    ]
    db.add_all(rows)
    db.commit()
    return rows


@pytest.fixture
def card_provider():
    return FakeProvider("stripe")


@pytest.fixture
def wallet_provider():
    return FakeProvider("paypal")


@pytest.fixture
def client(session_factory, card_provider, wallet_provider):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_card_provider] = lambda: card_provider
    app.dependency_overrides[get_wallet_provider] = lambda: wallet_provider
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    def _register(username="alice", email="alice@example.com", password="s3cret!", **extra):
        body = {"username": username, "email": email, "password": password, **extra}
        return client.post("/api/register", json=body)
    return _register


@pytest.fixture
def auth_headers(register_user):
    token = register_user().json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(register_user):
    token = register_user(username="bob", email="bob@example.com").json()["token"]
    return {"Authorization": f"Bearer {token}"}
