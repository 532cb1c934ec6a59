from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from storefront.models.category import CategoryResponse
from storefront.models.common import LocalizedText
from storefront.models.user import ActorSummary


class ProductCreate(BaseModel):
    name: LocalizedText
    description: LocalizedText
    slug: Optional[LocalizedText] = None  # derived from name when omitted
    price: float = Field(..., ge=0)
    image: str = Field(..., min_length=1)
    category_id: str
    is_active: bool = True


class ProductUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    slug: Optional[LocalizedText] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    category_id: Optional[str] = None
    is_active: Optional[bool] = None


class ProductResponse(BaseModel):
    id: str
    name: LocalizedText
    description: LocalizedText
    slug: LocalizedText
    price: float
    image: str
    # Resolved category, or the bare id when the reference dangles
    category: Union[CategoryResponse, str, None] = None
    is_active: bool = True
    created_by: Optional[ActorSummary] = None
    updated_by: Optional[ActorSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductListResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    data: list[ProductResponse]


class CategoryProductListResponse(ProductListResponse):
    category: CategoryResponse


class ProductEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ProductResponse
