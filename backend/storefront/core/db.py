from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from storefront.core.config import settings

_client: MongoClient | None = None
_db: Database | None = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        _client = MongoClient(settings.MONGODB_URI)
    return _client


def get_db() -> Database:
    global _db
    if _db is None:
        _db = get_client()[settings.MONGODB_DB_NAME]
    return _db


def get_users_collection() -> Collection:
    return get_db()["users"]


def get_categories_collection() -> Collection:
    return get_db()["categories"]


def get_products_collection() -> Collection:
    return get_db()["products"]


def init_db() -> None:
    db = get_db()
    users = db["users"]
    users.create_index("email", unique=True)
    categories = db["categories"]
    categories.create_index("slug.en", unique=True)
    categories.create_index("slug.ar", unique=True)
    categories.create_index("is_active")
    products = db["products"]
    products.create_index("slug.en", unique=True)
    products.create_index("slug.ar", unique=True)
    products.create_index([("is_active", ASCENDING), ("category_id", ASCENDING)])
    products.create_index([("created_at", DESCENDING)])
    products.create_index("price")
