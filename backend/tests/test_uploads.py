from unittest.mock import MagicMock, patch

from bson import ObjectId

from conftest import auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_requires_admin(client, mongo_db, customer):
    files = {"file": ("photo.png", PNG_BYTES, "image/png")}
    assert client.post("/api/uploads/images", files=files).status_code == 401
    assert client.post("/api/uploads/images", files=files, headers=auth_headers(customer)).status_code == 403


def test_upload_rejects_non_images(client, mongo_db, admin):
    files = {"file": ("notes.txt", b"hello", "text/plain")}
    r = client.post("/api/uploads/images", files=files, headers=auth_headers(admin))
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_TYPE"


@patch("storefront.core.config.settings.MAX_UPLOAD_SIZE", 16)
def test_upload_rejects_large_files(client, mongo_db, admin):
    files = {"file": ("photo.png", PNG_BYTES, "image/png")}
    r = client.post("/api/uploads/images", files=files, headers=auth_headers(admin))
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "FILE_TOO_LARGE"


def test_upload_stores_image_and_returns_url(client, mongo_db, admin):
    fs = MagicMock()
    file_id = ObjectId()
    fs.put.return_value = file_id
    with patch("storefront.routers.uploads._fs", return_value=fs):
        r = client.post(
            "/api/uploads/images",
            files={"file": ("photo.png", PNG_BYTES, "image/png")},
            headers=auth_headers(admin),
        )
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["file_id"] == str(file_id)
    assert data["url"] == f"/api/uploads/images/{file_id}"
    args, kwargs = fs.put.call_args
    assert args[0] == PNG_BYTES
    assert kwargs["content_type"] == "image/png"
    assert kwargs["uploaded_by"] == admin["_id"]


def test_get_image_not_found(client, mongo_db):
    r = client.get("/api/uploads/images/not-an-id")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "FILE_NOT_FOUND"


def test_upload_rejects_image_type_with_wrong_extension(client, mongo_db, admin):
    fs = MagicMock()
    with patch("storefront.routers.uploads._fs", return_value=fs):
        r = client.post(
            "/api/uploads/images",
            files={"file": ("photo.exe", PNG_BYTES, "image/png")},
            headers=auth_headers(admin),
        )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_TYPE"
    fs.put.assert_not_called()


@patch("storefront.core.config.settings.MAX_UPLOAD_SIZE", 16)
def test_upload_accepts_file_exactly_at_the_cap(client, mongo_db, admin):
    fs = MagicMock()
    fs.put.return_value = ObjectId()
    with patch("storefront.routers.uploads._fs", return_value=fs):
        r = client.post(
            "/api/uploads/images",
            files={"file": ("photo.JPG", PNG_BYTES[:16], "image/jpeg")},
            headers=auth_headers(admin),
        )
    assert r.status_code == 201
    assert fs.put.call_args[0][0] == PNG_BYTES[:16]


def test_get_image_streams_stored_file(client, mongo_db):
    file_id = ObjectId()
    grid_out = MagicMock()
    grid_out.content_type = "image/png"
    grid_out.read.return_value = PNG_BYTES
    fs = MagicMock()
    fs.get.return_value = grid_out
    with patch("storefront.routers.uploads._fs", return_value=fs):
        r = client.get(f"/api/uploads/images/{file_id}")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content == PNG_BYTES
    fs.get.assert_called_once_with(file_id)
