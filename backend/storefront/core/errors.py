from typing import Any, Optional


class AppError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "details": self.details,
            },
        }


class NotFoundError(AppError):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, status_code=404, details=details)


class ValidationError(AppError):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, status_code=400, details=details)


class ConflictError(AppError):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, status_code=409, details=details)


class StoreFailure(AppError):
    """The document store raised; the original error text travels in details."""

    def __init__(self, message: str, error: str):
        super().__init__(STORE_FAILURE, message, status_code=500, details={"error": error})


# Common error codes
CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
USER_NOT_FOUND = "USER_NOT_FOUND"
FILE_NOT_FOUND = "FILE_NOT_FOUND"
INVALID_LANGUAGE = "INVALID_LANGUAGE"
INVALID_PAGINATION = "INVALID_PAGINATION"
INVALID_FILTER = "INVALID_FILTER"
INVALID_CATEGORY = "INVALID_CATEGORY"
INVALID_SLUG = "INVALID_SLUG"
INVALID_REQUEST = "INVALID_REQUEST"
SLUG_EXISTS = "SLUG_EXISTS"
STORE_FAILURE = "STORE_FAILURE"
UNAUTHORIZED = "UNAUTHORIZED"
USER_EXISTS = "USER_EXISTS"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
FORBIDDEN = "FORBIDDEN"
# Uploads
NO_FILE = "NO_FILE"
INVALID_TYPE = "INVALID_TYPE"
FILE_TOO_LARGE = "FILE_TOO_LARGE"
