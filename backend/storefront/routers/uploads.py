"""
Product image uploads: admins upload to GridFS; the returned url is what goes
into Product.image and is served publicly.
"""
import logging
import os
from typing import Annotated

from bson import ObjectId
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from gridfs import GridFS
from gridfs.errors import NoFile

from storefront.core.config import settings
from storefront.core.db import get_db
from storefront.core.deps import get_current_admin_user
from storefront.core.errors import (
    NotFoundError,
    ValidationError,
    FILE_NOT_FOUND,
    FILE_TOO_LARGE,
    INVALID_TYPE,
    NO_FILE,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["uploads"])

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}


def _fs() -> GridFS:
    return GridFS(get_db(), collection="images")


@router.post("/images", status_code=201)
def upload_image(
    current_user: Annotated[dict, Depends(get_current_admin_user)],
    file: UploadFile = File(...),
):
    if not file.filename:
        raise ValidationError(NO_FILE, "No file provided")
    content_type = file.content_type or "application/octet-stream"
    extension = os.path.splitext(file.filename)[1].lower()
    if content_type not in ALLOWED_CONTENT_TYPES or extension not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            INVALID_TYPE,
            "Only image files are allowed (jpeg, jpg, png, gif, webp)",
            details={"content_type": content_type, "filename": file.filename},
        )
    # read at most one byte past the cap
    data = file.file.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(data) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(FILE_TOO_LARGE, f"Max size {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB")
    file_id = _fs().put(data, filename=file.filename, content_type=content_type, uploaded_by=current_user["_id"])
    logger.info("Stored image %s (%s, %d bytes)", file_id, content_type, len(data))
    file_id_str = str(file_id)
    return {
        "success": True,
        "message": "Image uploaded successfully",
        "data": {
            "file_id": file_id_str,
            "url": f"/api/uploads/images/{file_id_str}",
            "content_type": content_type,
        },
    }


@router.get("/images/{file_id}")
def get_image(file_id: str):
    if not ObjectId.is_valid(file_id):
        raise NotFoundError(FILE_NOT_FOUND, "Image not found")
    try:
        grid_out = _fs().get(ObjectId(file_id))
    except NoFile:
        raise NotFoundError(FILE_NOT_FOUND, "Image not found")
    content_type = grid_out.content_type or "application/octet-stream"
    return Response(content=grid_out.read(), media_type=content_type)
