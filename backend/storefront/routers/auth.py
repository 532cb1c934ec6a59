from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.core.deps import get_current_admin_user, get_current_user
from storefront.models.user import (
    AdminUpdateUserRequest,
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    Role,
    UpdateProfileRequest,
    UserEnvelope,
    UserListResponse,
)
from storefront.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def auth_register(req: RegisterRequest):
    """Register a customer account and return a token."""
    return auth_service.register(req)


@router.post("/login", response_model=AuthResponse)
def auth_login(req: LoginRequest):
    return auth_service.login(req)


@router.get("/me", response_model=UserEnvelope)
def get_me(current_user: Annotated[dict, Depends(get_current_user)]):
    return UserEnvelope(user=auth_service.user_to_response(current_user))


@router.put("/update-profile", response_model=UserEnvelope)
def update_profile(
    req: UpdateProfileRequest,
    current_user: Annotated[dict, Depends(get_current_user)],
):
    user = auth_service.update_profile(current_user, req)
    return UserEnvelope(message="Profile updated successfully", user=user)


@router.put("/change-password")
def change_password(
    req: ChangePasswordRequest,
    current_user: Annotated[dict, Depends(get_current_user)],
):
    auth_service.change_password(current_user, req)
    return {"success": True, "message": "Password changed successfully"}


# --- Admin: user management ---

@router.post("/admin/create", response_model=UserEnvelope, status_code=201)
def create_admin(
    req: RegisterRequest,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    user = auth_service.create_user(req.name, req.email, req.password, Role.ADMIN)
    return UserEnvelope(message="Admin user created successfully", user=auth_service.user_to_response(user))


@router.get("/users", response_model=UserListResponse)
def list_users(current_user: Annotated[dict, Depends(get_current_admin_user)]):
    users = auth_service.list_users()
    return UserListResponse(count=len(users), data=users)


@router.put("/users/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: str,
    req: AdminUpdateUserRequest,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    user = auth_service.admin_update_user(user_id, req)
    return UserEnvelope(message="User updated successfully", user=user)


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    current_user: Annotated[dict, Depends(get_current_admin_user)],
):
    auth_service.delete_user(user_id)
    return {"success": True, "message": "User deleted successfully"}
