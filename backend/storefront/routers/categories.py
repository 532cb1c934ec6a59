from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.core.deps import get_current_admin_user, get_preferred_lang
from storefront.models.category import (
    CategoryCreate,
    CategoryEnvelope,
    CategoryListResponse,
    CategoryUpdate,
)
from storefront.services import category_service

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories(
    lang: Annotated[str, Depends(get_preferred_lang)],
):
    categories = category_service.list_categories(lang)
    return CategoryListResponse(count=len(categories), data=categories)


@router.get("/slug/{lang}/{slug}", response_model=CategoryEnvelope)
def get_category_by_slug(lang: str, slug: str):
    return CategoryEnvelope(data=category_service.get_category_by_slug(lang, slug))


@router.get("/{category_id}", response_model=CategoryEnvelope)
def get_category(category_id: str):
    return CategoryEnvelope(data=category_service.get_category(category_id))


@router.post("", response_model=CategoryEnvelope, status_code=201)
def create_category(
    data: CategoryCreate,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    category = category_service.create_category(data)
    return CategoryEnvelope(message="Category created successfully", data=category)


@router.put("/{category_id}", response_model=CategoryEnvelope)
def update_category(
    category_id: str,
    data: CategoryUpdate,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    category = category_service.update_category(category_id, data)
    return CategoryEnvelope(message="Category updated successfully", data=category)


@router.delete("/{category_id}", response_model=CategoryEnvelope)
def delete_category(
    category_id: str,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    category = category_service.delete_category(category_id)
    return CategoryEnvelope(message="Category deleted successfully", data=category)
