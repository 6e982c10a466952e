# tests/conftest.py
import os
import sys
import pytest

# so that `from app import create_app` works when pytest runs from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from models import Product, User
from repository import MarketRepository, seed_products
from storage import MemoryRecordStore


@pytest.fixture()
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    })
    # no app context is held here: each request must get its own `g`
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def repository():
    return MarketRepository(MemoryRecordStore())


@pytest.fixture()
def products():
    return seed_products()


@pytest.fixture()
def make_product():
    def _make(product_id, seller_email="seller@example.com", **overrides):
        fields = dict(
            id=product_id,
            title=f"Item {product_id}",
            description="Gently used",
            price=100,
            category="others",
            location="delhi",
            seller="Seller",
            seller_email=seller_email,
        )
        fields.update(overrides)
        return Product(**fields)
    return _make


@pytest.fixture()
def alice():
    return User(id="100", name="Alice", email="alice@example.com", password="")


def register_user(client, name="Alice", email="alice@example.com", password="secret1", confirm=None):
    return client.post(
        "/register",
        data={
            "name": name,
            "email": email,
            "password": password,
            "confirm_password": password if confirm is None else confirm,
        },
        follow_redirects=False,
    )
