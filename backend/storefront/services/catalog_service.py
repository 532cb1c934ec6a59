"""
Product listing: filter, sort and paginate active products.

Every listing issues a count over the filter and a page fetch over the same
filter. In weak mode (the default) these are two independent reads, so under
concurrent writes total/pages and the returned page can briefly disagree.
Snapshot mode runs both reads in one snapshot session (requires a replica set).
Store errors are logged and raised as StoreFailure, never turned into empty pages.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from storefront.core.config import settings
from storefront.core.db import get_categories_collection, get_client, get_products_collection
from storefront.core.errors import NotFoundError, StoreFailure, CATEGORY_NOT_FOUND
from storefront.models.pagination import CategoryFilter, ConsistencyMode, PageRequest, PageResult
from storefront.services.category_service import doc_to_category
from storefront.services.product_service import hydrate_products
from storefront.utils.objectid import parse_objectid

logger = logging.getLogger(__name__)


def _consistency_mode() -> ConsistencyMode:
    return ConsistencyMode(settings.CATALOG_CONSISTENCY)


@contextmanager
def _read_session(mode: ConsistencyMode) -> Iterator[Any]:
    if mode is ConsistencyMode.SNAPSHOT:
        with get_client().start_session(snapshot=True) as session:
            yield session
    else:
        yield None


def _session_kwargs(session) -> dict:
    return {"session": session} if session is not None else {}


def resolve_category_slug(category: CategoryFilter) -> ObjectId:
    """Category id for a slug in the given language, or NotFoundError."""
    try:
        doc = get_categories_collection().find_one({category.slug_field: category.slug}, {"_id": 1})
    except PyMongoError as e:
        logger.exception("Category lookup failed for %s=%s", category.slug_field, category.slug)
        raise StoreFailure("Error fetching products", str(e))
    if not doc:
        raise NotFoundError(
            CATEGORY_NOT_FOUND,
            "Category not found",
            details={"lang": category.lang, "slug": category.slug},
        )
    return doc["_id"]


def _fetch_page(query: dict, request: PageRequest) -> PageResult:
    col = get_products_collection()
    mode = _consistency_mode()
    try:
        with _read_session(mode) as session:
            kwargs = _session_kwargs(session)
            total = col.count_documents(query, **kwargs)
            cursor = (
                col.find(query, **kwargs)
                .sort(request.sort.sort_spec())
                .skip(request.skip)
                .limit(request.limit)
            )
            docs = list(cursor)
            items = hydrate_products(docs, session=session)
    except PyMongoError as e:
        logger.exception("Product listing failed (query=%s, page=%s, limit=%s)", query, request.page, request.limit)
        raise StoreFailure("Error fetching products", str(e))
    logger.debug(
        "Listed products: query=%s sort=%s page=%s limit=%s total=%s returned=%s mode=%s",
        query, request.sort.value, request.page, request.limit, total, len(items), mode.value,
    )
    return PageResult(
        items=items,
        total=total,
        page=request.page,
        limit=request.limit,
    )


def list_products(request: PageRequest) -> PageResult:
    """Active products, optionally restricted to the category named by request.category."""
    query: dict[str, Any] = {"is_active": True}
    if request.category is not None:
        query["category_id"] = resolve_category_slug(request.category)
    return _fetch_page(query, request)


def list_by_category_id(category_id: str, request: PageRequest) -> PageResult:
    """Like list_products for an already known category id; the category rides along in the result."""
    oid = parse_objectid(category_id)
    category_doc: Optional[dict] = None
    if oid is not None:
        try:
            category_doc = get_categories_collection().find_one({"_id": oid})
        except PyMongoError as e:
            logger.exception("Category lookup failed for id %s", category_id)
            raise StoreFailure("Error fetching products", str(e))
    if not category_doc:
        raise NotFoundError(CATEGORY_NOT_FOUND, "Category not found", details={"category_id": category_id})
    result = _fetch_page({"is_active": True, "category_id": oid}, request)
    result.category = doc_to_category(category_doc)
    return result
