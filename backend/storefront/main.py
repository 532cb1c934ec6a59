import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.core.config import settings
from storefront.core.db import init_db
from storefront.core.errors import AppError, INVALID_REQUEST
from storefront.core.logger import setup_logging
from storefront.routers import auth, categories, products, uploads

setup_logging()
logger = logging.getLogger("storefront.http")

app = FastAPI(
    title="Storefront Catalog API",
    description="Bilingual (English/Arabic) product catalog backend",
    version="1.0.0",
    docs_url="/api-docs",
    redoc_url="/redoc",
)


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg")}
        for e in exc.errors()
    ]
    err = AppError(INVALID_REQUEST, "Invalid request", status_code=400, details={"errors": errors})
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(
        level,
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    try:
        init_db()
    except Exception as e:
        uri = getattr(settings, "MONGODB_URI", "mongodb://localhost:27017")
        if "27017" in uri and "localhost" in uri:
            raise RuntimeError(
                "MongoDB connection failed. In production/containers you must set MONGODB_URI "
                "(e.g. MongoDB Atlas or your platform's MongoDB URL). Current value is default localhost."
            ) from e
        raise


app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(uploads.router)


@app.get("/api/health")
def health():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
