from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from storefront.models.common import LocalizedText


class CategoryCreate(BaseModel):
    name: LocalizedText
    slug: Optional[LocalizedText] = None  # derived from name when omitted
    is_active: bool = True


class CategoryUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    slug: Optional[LocalizedText] = None
    is_active: Optional[bool] = None


class CategoryResponse(BaseModel):
    id: str
    name: LocalizedText
    slug: LocalizedText
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[CategoryResponse]


class CategoryEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: CategoryResponse
