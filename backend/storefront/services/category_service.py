import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from storefront.core.db import get_categories_collection
from storefront.core.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    CATEGORY_NOT_FOUND,
    INVALID_LANGUAGE,
    INVALID_SLUG,
    SLUG_EXISTS,
)
from storefront.models.category import CategoryCreate, CategoryResponse, CategoryUpdate
from storefront.models.common import DEFAULT_LANGUAGE, LANGUAGES, LocalizedText, is_language, localize
from storefront.utils.objectid import parse_objectid
from storefront.utils.slug import bilingual_slug, slugify

logger = logging.getLogger(__name__)


def get_categories_col() -> Collection:
    return get_categories_collection()


def doc_to_category(d: dict) -> CategoryResponse:
    return CategoryResponse(
        id=str(d["_id"]),
        name=d["name"],
        slug=d["slug"],
        is_active=d.get("is_active", True),
        created_at=d.get("created_at"),
        updated_at=d.get("updated_at"),
    )


def normalize_slug(slug: Optional[LocalizedText], name: LocalizedText) -> dict[str, str]:
    """Slugify the given slugs (or derive them from name); an empty result is rejected."""
    if slug is None:
        values = bilingual_slug(name)
    else:
        values = {lang: slugify(slug.get(lang), lang) for lang in LANGUAGES}
    empty = [lang for lang, value in values.items() if not value]
    if empty:
        raise ValidationError(
            INVALID_SLUG,
            "Slug cannot be empty; provide a slug for: " + ", ".join(empty),
            details={"languages": empty},
        )
    return values


def ensure_slug_available(col: Collection, slug: dict[str, str], exclude_id=None, entity: str = "Category") -> None:
    """Raise ConflictError when another document in col already uses one of the slugs."""
    for lang in LANGUAGES:
        q = {f"slug.{lang}": slug[lang]}
        if exclude_id is not None:
            q["_id"] = {"$ne": exclude_id}
        if col.find_one(q, {"_id": 1}):
            raise ConflictError(
                SLUG_EXISTS,
                f"{entity} with this slug already exists",
                details={"lang": lang, "slug": slug[lang]},
            )


def list_categories(lang: str = DEFAULT_LANGUAGE) -> list[CategoryResponse]:
    """Active categories ordered by their name in `lang`; ties stay newest first."""
    col = get_categories_col()
    cursor = col.find({"is_active": True}).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
    docs = list(cursor)
    docs.sort(key=lambda d: localize(d.get("name"), lang).casefold())
    return [doc_to_category(d) for d in docs]


def find_category_doc(category_id: str) -> Optional[dict]:
    oid = parse_objectid(category_id)
    if oid is None:
        return None
    return get_categories_col().find_one({"_id": oid})


def get_category(category_id: str) -> CategoryResponse:
    doc = find_category_doc(category_id)
    if not doc:
        raise NotFoundError(CATEGORY_NOT_FOUND, "Category not found")
    return doc_to_category(doc)


def get_category_by_slug(lang: str, slug: str) -> CategoryResponse:
    if not is_language(lang):
        raise ValidationError(INVALID_LANGUAGE, 'Invalid language. Use "en" or "ar"')
    doc = get_categories_col().find_one({f"slug.{lang}": slug})
    if not doc:
        raise NotFoundError(CATEGORY_NOT_FOUND, "Category not found")
    return doc_to_category(doc)


def create_category(data: CategoryCreate) -> CategoryResponse:
    col = get_categories_col()
    slug = normalize_slug(data.slug, data.name)
    ensure_slug_available(col, slug)
    now = datetime.now(timezone.utc)
    doc = {
        "name": data.name.model_dump(),
        "slug": slug,
        "is_active": data.is_active,
        "created_at": now,
        "updated_at": now,
    }
    try:
        r = col.insert_one(doc)
    except DuplicateKeyError:
        raise ConflictError(SLUG_EXISTS, "Category with this slug already exists")
    doc["_id"] = r.inserted_id
    logger.info("Created category %s (%s)", doc["_id"], slug["en"])
    return doc_to_category(doc)


def update_category(category_id: str, data: CategoryUpdate) -> CategoryResponse:
    col = get_categories_col()
    oid = parse_objectid(category_id)
    existing = col.find_one({"_id": oid}) if oid else None
    if not existing:
        raise NotFoundError(CATEGORY_NOT_FOUND, "Category not found")
    update = data.model_dump(exclude_unset=True, exclude_none=True)
    if not update:
        return doc_to_category(existing)
    if data.slug is not None:
        name = data.name or LocalizedText(**existing["name"])
        update["slug"] = normalize_slug(data.slug, name)
        ensure_slug_available(col, update["slug"], exclude_id=oid)
    update["updated_at"] = datetime.now(timezone.utc)
    try:
        result = col.find_one_and_update(
            {"_id": oid},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise ConflictError(SLUG_EXISTS, "Category with this slug already exists")
    if not result:
        raise NotFoundError(CATEGORY_NOT_FOUND, "Category not found")
    return doc_to_category(result)


def delete_category(category_id: str) -> CategoryResponse:
    col = get_categories_col()
    oid = parse_objectid(category_id)
    doc = col.find_one_and_delete({"_id": oid}) if oid else None
    if not doc:
        raise NotFoundError(CATEGORY_NOT_FOUND, "Category not found")
    logger.info("Deleted category %s", oid)
    return doc_to_category(doc)
