import os
import sys
from datetime import datetime, timedelta, timezone

import mongomock
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Use test DB name so we never touch real data; the client itself is replaced by mongomock below
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "storefront_test")

from fastapi.testclient import TestClient

from storefront.core import db as db_module
from storefront.core.db import init_db
from storefront.core.security import create_access_token, get_password_hash
from storefront.main import app

PASSWORD = "secret123"
_PASSWORD_HASH = get_password_hash(PASSWORD)
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def mongo_db(monkeypatch):
    client = mongomock.MongoClient()
    database = client["storefront_test"]
    monkeypatch.setattr(db_module, "_client", client)
    monkeypatch.setattr(db_module, "_db", database)
    init_db()
    return database


@pytest.fixture
def client(mongo_db):
    return TestClient(app)


def make_user(db, email: str, role: str = "customer", name: str = "Test User", is_active: bool = True) -> dict:
    doc = {
        "name": name,
        "email": email,
        "password_hash": _PASSWORD_HASH,
        "role": role,
        "is_active": is_active,
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    doc["_id"] = db["users"].insert_one(doc).inserted_id
    return doc


def auth_headers(user: dict) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user['_id']))}"}


def make_category(db, en: str, ar: str, slug_en: str | None = None, slug_ar: str | None = None, is_active: bool = True) -> dict:
    doc = {
        "name": {"en": en, "ar": ar},
        "slug": {"en": slug_en or en.lower(), "ar": slug_ar or ar},
        "is_active": is_active,
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    doc["_id"] = db["categories"].insert_one(doc).inserted_id
    return doc


_product_seq = iter(range(1, 1_000_000))


def make_product(
    db,
    category: dict,
    name_en: str,
    price: float,
    is_active: bool = True,
    created_at: datetime | None = None,
    created_by=None,
) -> dict:
    n = next(_product_seq)
    doc = {
        "name": {"en": name_en, "ar": f"منتج {n}"},
        "description": {"en": f"{name_en} description", "ar": "وصف"},
        "slug": {"en": f"{name_en.lower().replace(' ', '-')}-{n}", "ar": f"منتج-{n}"},
        "price": price,
        "image": f"/api/uploads/images/{n}",
        "category_id": category["_id"],
        "is_active": is_active,
        "created_by": created_by,
        "updated_by": created_by,
        "created_at": created_at or BASE_TIME + timedelta(minutes=n),
        "updated_at": created_at or BASE_TIME + timedelta(minutes=n),
    }
    doc["_id"] = db["products"].insert_one(doc).inserted_id
    return doc


@pytest.fixture
def admin(mongo_db):
    return make_user(mongo_db, "admin@example.com", role="admin", name="Admin")


@pytest.fixture
def customer(mongo_db):
    return make_user(mongo_db, "customer@example.com", role="customer", name="Customer")


@pytest.fixture
def electronics(mongo_db):
    return make_category(mongo_db, "Electronics", "إلكترونيات", slug_en="electronics", slug_ar="الكترونيات")
