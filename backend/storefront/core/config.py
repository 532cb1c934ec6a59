from pydantic_settings import BaseSettings
from typing import List, Literal


def _parse_cors_origins(value: str) -> List[str]:
    value = value.strip()
    if not value:
        return []
    if value == "*":
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "storefront"
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    ENV: str = "production"
    LOG_LEVEL: str = "INFO"
    # Product listing
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100
    # "weak": count and page fetch are independent reads; "snapshot" needs a replica set
    CATALOG_CONSISTENCY: Literal["weak", "snapshot"] = "weak"
    # Uploads
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB
    # Env as plain string (e.g. "*" or "http://localhost:4200,http://localhost:4000")
    CORS_ORIGINS: str = "http://localhost:4200,http://localhost:4000"

    @property
    def cors_origins_list(self) -> List[str]:
        return _parse_cors_origins(self.CORS_ORIGINS)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
