import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from storefront.core.db import get_users_collection
from storefront.core.errors import (
    AppError,
    ConflictError,
    NotFoundError,
    USER_EXISTS,
    USER_NOT_FOUND,
    INVALID_CREDENTIALS,
)
from storefront.core.security import get_password_hash, verify_password, create_access_token
from storefront.models.user import (
    AdminUpdateUserRequest,
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    Role,
    UpdateProfileRequest,
    UserResponse,
)
from storefront.utils.objectid import parse_objectid

logger = logging.getLogger(__name__)


def get_users() -> Collection:
    return get_users_collection()


def user_to_response(user: dict) -> UserResponse:
    return UserResponse(
        id=str(user["_id"]),
        name=user.get("name") or "",
        email=user["email"],
        role=user.get("role", Role.CUSTOMER.value),
        is_active=user.get("is_active", True),
        created_at=user.get("created_at"),
    )


def _ensure_email_free(email: str, exclude_id: Optional[ObjectId] = None) -> None:
    q: dict = {"email": email}
    if exclude_id is not None:
        q["_id"] = {"$ne": exclude_id}
    if get_users().find_one(q, {"_id": 1}):
        raise ConflictError(USER_EXISTS, "User with this email already exists")


def create_user(name: str, email: str, password: str, role: Role = Role.CUSTOMER) -> dict:
    users = get_users()
    email = email.lower()
    _ensure_email_free(email)
    now = datetime.now(timezone.utc)
    doc = {
        "name": name,
        "email": email,
        "password_hash": get_password_hash(password),
        "role": role.value,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }
    r = users.insert_one(doc)
    doc["_id"] = r.inserted_id
    logger.info("Created %s user %s", role.value, doc["_id"])
    return doc


def register(req: RegisterRequest) -> AuthResponse:
    # Public registration never grants admin
    user = create_user(req.name, req.email, req.password, Role.CUSTOMER)
    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(str(user["_id"])),
        user=user_to_response(user),
    )


def login(req: LoginRequest) -> AuthResponse:
    users = get_users()
    user = users.find_one({"email": req.email.lower()})
    if not user or not verify_password(req.password, user["password_hash"]):
        raise AppError(INVALID_CREDENTIALS, "Invalid email or password", status_code=401)
    if not user.get("is_active", True):
        raise AppError(INVALID_CREDENTIALS, "Account is deactivated. Please contact support.", status_code=401)
    return AuthResponse(
        message="Login successful",
        token=create_access_token(str(user["_id"])),
        user=user_to_response(user),
    )


def get_user_by_id(user_id: str) -> Optional[dict]:
    oid = parse_objectid(user_id)
    if oid is None:
        return None
    return get_users().find_one({"_id": oid})


def list_users() -> list[UserResponse]:
    cursor = get_users().find({}, {"password_hash": 0}).sort("created_at", DESCENDING)
    return [user_to_response(d) for d in cursor]


def update_profile(user: dict, req: UpdateProfileRequest) -> UserResponse:
    update = {}
    if req.name is not None:
        update["name"] = req.name
    if req.email is not None and req.email.lower() != user["email"]:
        _ensure_email_free(req.email.lower(), exclude_id=user["_id"])
        update["email"] = req.email.lower()
    if not update:
        return user_to_response(user)
    update["updated_at"] = datetime.now(timezone.utc)
    result = get_users().find_one_and_update(
        {"_id": user["_id"]},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    return user_to_response(result)


def change_password(user: dict, req: ChangePasswordRequest) -> None:
    if not verify_password(req.current_password, user["password_hash"]):
        raise AppError(INVALID_CREDENTIALS, "Current password is incorrect", status_code=401)
    get_users().update_one(
        {"_id": user["_id"]},
        {"$set": {"password_hash": get_password_hash(req.new_password), "updated_at": datetime.now(timezone.utc)}},
    )


def admin_update_user(user_id: str, req: AdminUpdateUserRequest) -> UserResponse:
    oid = parse_objectid(user_id)
    user = get_users().find_one({"_id": oid}) if oid else None
    if not user:
        raise NotFoundError(USER_NOT_FOUND, "User not found")
    update = req.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in update:
        update["email"] = update["email"].lower()
        _ensure_email_free(update["email"], exclude_id=oid)
    if "role" in update:
        update["role"] = Role(update["role"]).value
    if not update:
        return user_to_response(user)
    update["updated_at"] = datetime.now(timezone.utc)
    result = get_users().find_one_and_update(
        {"_id": oid},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    return user_to_response(result)


def delete_user(user_id: str) -> None:
    oid = parse_objectid(user_id)
    if oid is None:
        raise NotFoundError(USER_NOT_FOUND, "User not found")
    result = get_users().delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise NotFoundError(USER_NOT_FOUND, "User not found")
    logger.info("Deleted user %s", oid)
