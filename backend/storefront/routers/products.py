from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from storefront.core.deps import get_current_admin_user
from storefront.models.pagination import PageRequest
from storefront.models.product import (
    CategoryProductListResponse,
    ProductCreate,
    ProductEnvelope,
    ProductListResponse,
    ProductUpdate,
)
from storefront.services import catalog_service, product_service

router = APIRouter(prefix="/api/products", tags=["products"])

# page/limit arrive as raw strings so malformed values get the 400 envelope from PageRequest.parse
PageQuery = Annotated[Optional[str], Query(description="Page number, starting at 1")]
LimitQuery = Annotated[Optional[str], Query(description="Items per page (max 100)")]
SortQuery = Annotated[
    Optional[str],
    Query(description="newest | oldest | price-low | price-high | name-asc | name-desc"),
]


@router.get("", response_model=ProductListResponse)
def list_products(
    category: Annotated[Optional[str], Query(description="Category slug to filter by")] = None,
    lang: Annotated[Optional[str], Query(description="Language of the category slug: en or ar")] = None,
    page: PageQuery = None,
    limit: LimitQuery = None,
    sort: SortQuery = None,
):
    request = PageRequest.parse(page=page, limit=limit, sort=sort, category=category, lang=lang)
    result = catalog_service.list_products(request)
    return ProductListResponse(
        count=result.count,
        total=result.total,
        page=result.page,
        pages=result.pages,
        data=result.items,
    )


@router.get("/category/{category_id}", response_model=CategoryProductListResponse)
def list_products_by_category(
    category_id: str,
    page: PageQuery = None,
    limit: LimitQuery = None,
    sort: SortQuery = None,
):
    request = PageRequest.parse(page=page, limit=limit, sort=sort)
    result = catalog_service.list_by_category_id(category_id, request)
    return CategoryProductListResponse(
        count=result.count,
        total=result.total,
        page=result.page,
        pages=result.pages,
        data=result.items,
        category=result.category,
    )


@router.get("/id/{product_id}", response_model=ProductEnvelope)
def get_product(product_id: str):
    return ProductEnvelope(data=product_service.get_product(product_id))


@router.get("/{lang}/{slug}", response_model=ProductEnvelope)
def get_product_by_slug(lang: str, slug: str):
    return ProductEnvelope(data=product_service.get_product_by_slug(lang, slug))


@router.post("", response_model=ProductEnvelope, status_code=201)
def create_product(
    data: ProductCreate,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    product = product_service.create_product(data, actor_id=current_user["_id"])
    return ProductEnvelope(message="Product created successfully", data=product)


@router.put("/{product_id}", response_model=ProductEnvelope)
def update_product(
    product_id: str,
    data: ProductUpdate,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    product = product_service.update_product(product_id, data, actor_id=current_user["_id"])
    return ProductEnvelope(message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=ProductEnvelope)
def delete_product(
    product_id: str,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    product = product_service.delete_product(product_id)
    return ProductEnvelope(message="Product deleted successfully", data=product)
