"""
Input and output contract of the product listing: sort orders, the parsed page
request and the page result.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pymongo import ASCENDING, DESCENDING

from storefront.core.config import settings
from storefront.core.errors import ValidationError, INVALID_FILTER, INVALID_PAGINATION
from storefront.models.common import Language, is_language

DEFAULT_PAGE = 1
# Largest skip a BSON int64 can carry
MAX_SKIP = 2**63 - 1


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Unknown or missing values fall back to newest."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST

    def sort_spec(self) -> list[tuple[str, int]]:
        # _id follows the primary key's direction so the order is total
        field_name, direction = _SORT_FIELDS[self]
        return [(field_name, direction), ("_id", direction)]


_SORT_FIELDS: dict[SortOrder, tuple[str, int]] = {
    SortOrder.NEWEST: ("created_at", DESCENDING),
    SortOrder.OLDEST: ("created_at", ASCENDING),
    SortOrder.PRICE_LOW: ("price", ASCENDING),
    SortOrder.PRICE_HIGH: ("price", DESCENDING),
    SortOrder.NAME_ASC: ("name.en", ASCENDING),
    SortOrder.NAME_DESC: ("name.en", DESCENDING),
}


class ConsistencyMode(str, Enum):
    WEAK = "weak"
    SNAPSHOT = "snapshot"


def parse_positive_int(value: Any, name: str, default: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise ValidationError(INVALID_PAGINATION, f"{name} must be a positive integer", details={name: value})
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise ValidationError(INVALID_PAGINATION, f"{name} must be a positive integer", details={name: value})
    if parsed < 1:
        raise ValidationError(INVALID_PAGINATION, f"{name} must be a positive integer", details={name: value})
    return parsed


@dataclass(frozen=True)
class CategoryFilter:
    lang: Language
    slug: str

    @property
    def slug_field(self) -> str:
        return f"slug.{self.lang}"


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = 10
    sort: SortOrder = SortOrder.NEWEST
    category: Optional[CategoryFilter] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def parse(
        cls,
        page: Any = None,
        limit: Any = None,
        sort: Optional[str] = None,
        category: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> "PageRequest":
        """
        Build a request from raw query values. Non-numeric or non-positive page/limit
        raise ValidationError, as does a page whose skip overflows int64; limit above
        MAX_PAGE_LIMIT is clamped. A category slug needs a language; a language on
        its own does not filter.
        """
        page_no = parse_positive_int(page, "page", DEFAULT_PAGE)
        per_page = min(parse_positive_int(limit, "limit", settings.DEFAULT_PAGE_LIMIT), settings.MAX_PAGE_LIMIT)
        if (page_no - 1) * per_page > MAX_SKIP:
            raise ValidationError(INVALID_PAGINATION, "page is out of range", details={"page": page})
        category_filter = None
        if category is not None and category.strip():
            if not is_language(lang):
                raise ValidationError(
                    INVALID_FILTER,
                    'Category filter requires lang "en" or "ar"',
                    details={"category": category, "lang": lang},
                )
            category_filter = CategoryFilter(lang=lang, slug=category.strip())
        return cls(page=page_no, limit=per_page, sort=SortOrder.parse(sort), category=category_filter)


@dataclass
class PageResult:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = 10
    category: Optional[Any] = None

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit > 0 else 0
