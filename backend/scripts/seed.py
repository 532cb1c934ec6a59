"""
Seed script: sample catalog data.
- categories (electronics, clothing, books)
- products (a few per category, bilingual names and descriptions)

Run from backend dir: python -m scripts.seed
Ensure MONGODB_URI is set (e.g. in .env or export).
Existing documents are kept; categories and products are matched by English slug.
"""
import os
import sys
from datetime import datetime, timedelta, timezone

# Ensure backend root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.core.db import get_db, init_db
from storefront.models.common import LocalizedText
from storefront.utils.slug import bilingual_slug

CATEGORIES = [
    ("Electronics", "إلكترونيات"),
    ("Clothing", "ملابس"),
    ("Books", "كتب"),
]

# (category en name, name en, name ar, description en, description ar, price)
PRODUCTS = [
    ("Electronics", "Laptop Pro 15", "لابتوب برو 15", "High-performance laptop with a 15-inch display", "حاسوب محمول عالي الأداء بشاشة 15 بوصة", 1299.99),
    ("Electronics", "Wireless Headphones", "سماعات لاسلكية", "Noise-cancelling over-ear headphones", "سماعات رأس بخاصية إلغاء الضوضاء", 199.0),
    ("Electronics", "Smart Watch", "ساعة ذكية", "Fitness tracking and notifications", "تتبع اللياقة والإشعارات", 249.5),
    ("Clothing", "Cotton T-Shirt", "تيشيرت قطني", "Classic fit cotton t-shirt", "تيشيرت قطني بقصة كلاسيكية", 19.99),
    ("Clothing", "Denim Jacket", "جاكيت جينز", "Washed denim jacket", "جاكيت جينز مغسول", 79.0),
    ("Books", "Arabic Poetry Collection", "مختارات من الشعر العربي", "Selected classical Arabic poems", "قصائد مختارة من الشعر العربي الكلاسيكي", 24.0),
]

PLACEHOLDER_IMAGE = "/assets/images/placeholder.webp"


def seed_categories(db) -> dict[str, dict]:
    col = db["categories"]
    now = datetime.now(timezone.utc)
    by_name = {}
    inserted = 0
    for en, ar in CATEGORIES:
        slug = bilingual_slug(LocalizedText(en=en, ar=ar))
        doc = col.find_one({"slug.en": slug["en"]})
        if not doc:
            doc = {
                "name": {"en": en, "ar": ar},
                "slug": slug,
                "is_active": True,
                "created_at": now,
                "updated_at": now,
            }
            doc["_id"] = col.insert_one(doc).inserted_id
            inserted += 1
        by_name[en] = doc
    print(f"Inserted {inserted} categories ({len(by_name)} total).")
    return by_name


def seed_products(db, categories: dict[str, dict]) -> None:
    col = db["products"]
    now = datetime.now(timezone.utc)
    inserted = 0
    for i, (category, name_en, name_ar, desc_en, desc_ar, price) in enumerate(PRODUCTS):
        slug = bilingual_slug(LocalizedText(en=name_en, ar=name_ar))
        if col.find_one({"slug.en": slug["en"]}):
            continue
        # spread creation times so "newest"/"oldest" sorting shows something
        created = now - timedelta(minutes=len(PRODUCTS) - i)
        col.insert_one({
            "name": {"en": name_en, "ar": name_ar},
            "description": {"en": desc_en, "ar": desc_ar},
            "slug": slug,
            "price": price,
            "image": PLACEHOLDER_IMAGE,
            "category_id": categories[category]["_id"],
            "is_active": True,
            "created_by": None,
            "updated_by": None,
            "created_at": created,
            "updated_at": created,
        })
        inserted += 1
    print(f"Inserted {inserted} products.")


def main():
    init_db()
    db = get_db()
    categories = seed_categories(db)
    seed_products(db, categories)
    print("Seed done. Collections: categories, products")
    print("Create an admin with: python -m scripts.create_admin <email> [password]")


if __name__ == "__main__":
    main()
