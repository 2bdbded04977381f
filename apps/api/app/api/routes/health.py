import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import DbSession
from app.core.config import settings
from app.schemas.health import HealthResponse

router = APIRouter(tags=["health"])
logger = logging.getLogger("spotted.health")


@router.get("/health", response_model=HealthResponse, summary="Health Check")
def health_endpoint(db: DbSession) -> HealthResponse:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("health_database_unavailable", exc_info=True)
        return HealthResponse(status="degraded", service=settings.app_name, database="unavailable")
    return HealthResponse(status="ok", service=settings.app_name, database="ok")
