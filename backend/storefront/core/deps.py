from typing import Annotated, Callable, Literal

from fastapi import Depends, Header, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from storefront.core.errors import AppError, UNAUTHORIZED, FORBIDDEN
from storefront.core.security import decode_access_token
from storefront.models.user import Role
from storefront.services.auth_service import get_user_by_id

security = HTTPBearer(auto_error=False)


def get_preferred_lang(
    accept_language: Annotated[str | None, Header(alias="Accept-Language")] = None,
    lang: Annotated[str | None, Query(description="Preferred language: ar or en")] = None,
) -> Literal["ar", "en"]:
    """Resolve preferred language from query param ?lang= or Accept-Language header. Default: en."""
    if lang and lang in ("ar", "en"):
        return lang
    if accept_language:
        # e.g. "ar", "ar-SA", "en-US,en;q=0.9,ar;q=0.8"
        for part in accept_language.split(","):
            part = part.split(";")[0].strip().lower()
            if part.startswith("ar"):
                return "ar"
            if part.startswith("en"):
                return "en"
    return "en"


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> dict:
    if not credentials:
        raise AppError(UNAUTHORIZED, "Not authorized to access this route. Please login.", status_code=401)
    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        raise AppError(UNAUTHORIZED, "Token is invalid or has expired. Please login again.", status_code=401)
    user = get_user_by_id(user_id)
    if not user:
        raise AppError(UNAUTHORIZED, "User not found. Token is invalid.", status_code=401)
    if not user.get("is_active", True):
        raise AppError(UNAUTHORIZED, "User account is deactivated.", status_code=401)
    return user


def require_roles(*roles: Role) -> Callable[..., dict]:
    """Dependency allowing only users whose role is in roles."""
    allowed = frozenset(roles)

    def checker(current_user: Annotated[dict, Depends(get_current_user)]) -> dict:
        try:
            role = Role(current_user.get("role"))
        except ValueError:
            role = None
        if role not in allowed:
            raise AppError(
                FORBIDDEN,
                f"User role '{current_user.get('role')}' is not authorized to access this route",
                status_code=403,
            )
        return current_user

    return checker


get_current_admin_user = require_roles(Role.ADMIN)
