from bson import ObjectId

from conftest import auth_headers, make_category


def test_categories_list_only_active(client, mongo_db):
    make_category(mongo_db, "Books", "كتب", slug_en="books")
    make_category(mongo_db, "Toys", "ألعاب", slug_en="toys", is_active=False)
    r = client.get("/api/categories")
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["count"] == 1
    for cat in data["data"]:
        assert "id" in cat
        assert cat["name"]["en"] and cat["name"]["ar"]
        assert cat["is_active"] is True


def test_categories_list_ordered_by_localized_name(client, mongo_db):
    make_category(mongo_db, "Books", "كتب", slug_en="books")
    make_category(mongo_db, "Apparel", "ملابس", slug_en="apparel")
    en = [c["name"]["en"] for c in client.get("/api/categories", params={"lang": "en"}).json()["data"]]
    ar = [c["name"]["ar"] for c in client.get("/api/categories", params={"lang": "ar"}).json()["data"]]
    assert en == ["Apparel", "Books"]
    assert ar == ["كتب", "ملابس"]


def test_get_category_by_id_and_slug(client, mongo_db, electronics):
    r = client.get(f"/api/categories/{electronics['_id']}")
    assert r.status_code == 200
    assert r.json()["data"]["slug"]["en"] == "electronics"
    r = client.get("/api/categories/slug/ar/الكترونيات")
    assert r.status_code == 200
    assert r.json()["data"]["id"] == str(electronics["_id"])
    assert client.get("/api/categories/slug/de/electronics").status_code == 400
    assert client.get("/api/categories/slug/en/garden").status_code == 404
    assert client.get(f"/api/categories/{ObjectId()}").status_code == 404


def test_create_category_derives_slugs(client, mongo_db, admin):
    r = client.post(
        "/api/categories",
        json={"name": {"en": "Home & Garden", "ar": "المنزل والحديقة"}},
        headers=auth_headers(admin),
    )
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["slug"] == {"en": "home-garden", "ar": "المنزل-والحديقة"}
    assert data["is_active"] is True


def test_create_category_normalizes_given_slug_and_rejects_duplicates(client, mongo_db, admin, electronics):
    headers = auth_headers(admin)
    r = client.post(
        "/api/categories",
        json={"name": {"en": "Gadgets", "ar": "أجهزة"}, "slug": {"en": "  Cool  Gadgets ", "ar": "أجهزة"}},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["data"]["slug"]["en"] == "cool-gadgets"
    r = client.post(
        "/api/categories",
        json={"name": {"en": "Electronics", "ar": "أجهزة إلكترونية"}},
        headers=headers,
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "SLUG_EXISTS"


def test_category_writes_require_admin(client, mongo_db, customer, electronics):
    payload = {"name": {"en": "Games", "ar": "ألعاب"}}
    assert client.post("/api/categories", json=payload).status_code == 401
    assert client.post("/api/categories", json=payload, headers=auth_headers(customer)).status_code == 403
    r = client.delete(f"/api/categories/{electronics['_id']}", headers=auth_headers(customer))
    assert r.status_code == 403


def test_update_category_soft_disable(client, mongo_db, admin, electronics):
    r = client.put(
        f"/api/categories/{electronics['_id']}",
        json={"is_active": False},
        headers=auth_headers(admin),
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["is_active"] is False
    assert data["name"]["en"] == "Electronics"
    assert client.get("/api/categories").json()["count"] == 0


def test_delete_category(client, mongo_db, admin, electronics):
    headers = auth_headers(admin)
    r = client.delete(f"/api/categories/{electronics['_id']}", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == str(electronics["_id"])
    assert client.delete(f"/api/categories/{electronics['_id']}", headers=headers).status_code == 404


def test_categories_list_honours_accept_language(client, mongo_db):
    make_category(mongo_db, "Books", "كتب", slug_en="books")
    make_category(mongo_db, "Apparel", "ملابس", slug_en="apparel")
    r = client.get("/api/categories", headers={"Accept-Language": "ar-SA,ar;q=0.9"})
    assert [c["name"]["ar"] for c in r.json()["data"]] == ["كتب", "ملابس"]
    r = client.get("/api/categories")
    assert [c["name"]["en"] for c in r.json()["data"]] == ["Apparel", "Books"]
