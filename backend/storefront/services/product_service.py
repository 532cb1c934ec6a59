import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from storefront.core.db import (
    get_categories_collection,
    get_products_collection,
    get_users_collection,
)
from storefront.core.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    INVALID_CATEGORY,
    INVALID_LANGUAGE,
    PRODUCT_NOT_FOUND,
    SLUG_EXISTS,
)
from storefront.models.common import LocalizedText, is_language
from storefront.models.product import ProductCreate, ProductResponse, ProductUpdate
from storefront.models.user import ActorSummary
from storefront.services.category_service import doc_to_category, ensure_slug_available, normalize_slug
from storefront.utils.objectid import parse_objectid

logger = logging.getLogger(__name__)

# Audit actors are shown with these fields only
ACTOR_PROJECTION = {"_id": 1, "name": 1, "email": 1}


def get_products_col() -> Collection:
    return get_products_collection()


def _by_id(col: Collection, ids: Iterable[ObjectId], projection: Optional[dict] = None, session=None) -> dict:
    oids = list({i for i in ids if isinstance(i, ObjectId)})
    if not oids:
        return {}
    kwargs: dict[str, Any] = {}
    if session is not None:
        kwargs["session"] = session
    cursor = col.find({"_id": {"$in": oids}}, projection, **kwargs)
    return {d["_id"]: d for d in cursor}


def _actor(users: dict, user_id) -> Optional[ActorSummary]:
    if user_id is None:
        return None
    d = users.get(user_id)
    if d is None:
        return ActorSummary(id=str(user_id))
    return ActorSummary(id=str(d["_id"]), name=d.get("name"), email=d.get("email"))


def hydrate_products(docs: list[dict], session=None) -> list[ProductResponse]:
    """
    Turn product documents into responses, resolving the category and the
    created_by/updated_by actors with one batched lookup each.
    """
    categories = _by_id(get_categories_collection(), (d.get("category_id") for d in docs), session=session)
    actor_ids = [d.get("created_by") for d in docs] + [d.get("updated_by") for d in docs]
    users = _by_id(get_users_collection(), actor_ids, ACTOR_PROJECTION, session=session)
    out = []
    for d in docs:
        category_id = d.get("category_id")
        category_doc = categories.get(category_id)
        out.append(
            ProductResponse(
                id=str(d["_id"]),
                name=d["name"],
                description=d["description"],
                slug=d["slug"],
                price=d["price"],
                image=d["image"],
                category=doc_to_category(category_doc) if category_doc else (str(category_id) if category_id else None),
                is_active=d.get("is_active", True),
                created_by=_actor(users, d.get("created_by")),
                updated_by=_actor(users, d.get("updated_by")),
                created_at=d.get("created_at"),
                updated_at=d.get("updated_at"),
            )
        )
    return out


def _hydrate_one(doc: dict) -> ProductResponse:
    return hydrate_products([doc])[0]


def _require_category(category_id: str) -> ObjectId:
    oid = parse_objectid(category_id)
    if oid is None or not get_categories_collection().find_one({"_id": oid}, {"_id": 1}):
        raise ValidationError(INVALID_CATEGORY, "Category does not exist", details={"category_id": category_id})
    return oid


def get_product(product_id: str) -> ProductResponse:
    oid = parse_objectid(product_id)
    doc = get_products_col().find_one({"_id": oid}) if oid else None
    if not doc:
        raise NotFoundError(PRODUCT_NOT_FOUND, "Product not found")
    return _hydrate_one(doc)


def get_product_by_slug(lang: str, slug: str) -> ProductResponse:
    if not is_language(lang):
        raise ValidationError(INVALID_LANGUAGE, 'Invalid language. Use "en" or "ar"')
    doc = get_products_col().find_one({f"slug.{lang}": slug, "is_active": True})
    if not doc:
        raise NotFoundError(PRODUCT_NOT_FOUND, "Product not found")
    return _hydrate_one(doc)


def create_product(data: ProductCreate, actor_id: Optional[ObjectId] = None) -> ProductResponse:
    col = get_products_col()
    category_id = _require_category(data.category_id)
    slug = normalize_slug(data.slug, data.name)
    ensure_slug_available(col, slug, entity="Product")
    now = datetime.now(timezone.utc)
    doc = {
        "name": data.name.model_dump(),
        "description": data.description.model_dump(),
        "slug": slug,
        "price": data.price,
        "image": data.image,
        "category_id": category_id,
        "is_active": data.is_active,
        "created_by": actor_id,
        "updated_by": actor_id,
        "created_at": now,
        "updated_at": now,
    }
    try:
        r = col.insert_one(doc)
    except DuplicateKeyError:
        raise ConflictError(SLUG_EXISTS, "Product with this slug already exists")
    doc["_id"] = r.inserted_id
    logger.info("Created product %s (%s)", doc["_id"], slug["en"])
    return _hydrate_one(doc)


def update_product(product_id: str, data: ProductUpdate, actor_id: Optional[ObjectId] = None) -> ProductResponse:
    col = get_products_col()
    oid = parse_objectid(product_id)
    existing = col.find_one({"_id": oid}) if oid else None
    if not existing:
        raise NotFoundError(PRODUCT_NOT_FOUND, "Product not found")
    update = data.model_dump(exclude_unset=True, exclude_none=True)
    if not update:
        return _hydrate_one(existing)
    if "category_id" in update:
        update["category_id"] = _require_category(update["category_id"])
    if data.slug is not None:
        name = data.name or LocalizedText(**existing["name"])
        update["slug"] = normalize_slug(data.slug, name)
        ensure_slug_available(col, update["slug"], exclude_id=oid, entity="Product")
    update["updated_by"] = actor_id
    update["updated_at"] = datetime.now(timezone.utc)
    try:
        result = col.find_one_and_update(
            {"_id": oid},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise ConflictError(SLUG_EXISTS, "Product with this slug already exists")
    if not result:
        raise NotFoundError(PRODUCT_NOT_FOUND, "Product not found")
    return _hydrate_one(result)


def delete_product(product_id: str) -> ProductResponse:
    col = get_products_col()
    oid = parse_objectid(product_id)
    doc = col.find_one_and_delete({"_id": oid}) if oid else None
    if not doc:
        raise NotFoundError(PRODUCT_NOT_FOUND, "Product not found")
    logger.info("Deleted product %s", oid)
    return _hydrate_one(doc)
