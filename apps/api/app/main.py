from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.routes.admin import router as admin_router
from app.api.routes.categories import router as categories_router
from app.api.routes.deletion_requests import router as deletion_requests_router
from app.api.routes.health import router as health_router
from app.api.routes.product_requests import router as product_requests_router
from app.api.routes.products import router as products_router
from app.api.routes.sale_confirmations import router as sale_confirmations_router
from app.api.routes.settings import router as settings_router
from app.api.routes.token_validation import router as token_validation_router
from app.core.auth import validate_admin_auth_config
from app.core.config import settings
from app.core.openapi import API_DESCRIPTION, install_custom_openapi
from app.core.product_tokens import validate_product_token_config
from app.observability.logging import configure_logging
from app.observability.request_logging import request_logging_middleware


def validate_startup_config() -> None:
    validate_product_token_config()
    validate_admin_auth_config()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    validate_startup_config()
    yield


app = FastAPI(
    title="Spotted API",
    summary="Classifieds catalog with moderated submissions and owner links",
    description=API_DESCRIPTION,
    version="1.0.0",
    contact={"name": "Spotted GFC", "url": "https://spottedgfc.pl"},
    openapi_url="/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    servers=[
        {"url": "http://localhost:8000", "description": "Local development"},
    ],
    lifespan=lifespan,
)
app.openapi = install_custom_openapi(app)  # type: ignore[method-assign]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(BaseHTTPMiddleware, dispatch=request_logging_middleware)

app.include_router(health_router)
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(settings_router)
app.include_router(product_requests_router)
app.include_router(token_validation_router)
app.include_router(sale_confirmations_router)
app.include_router(deletion_requests_router)
app.include_router(admin_router)
