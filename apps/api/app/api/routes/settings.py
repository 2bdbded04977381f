from fastapi import APIRouter

from app.api.deps import Admin, DbSession
from app.core.openapi import ADMIN_ERROR_RESPONSES
from app.modules.store_settings.service import get_store_settings, update_store_settings
from app.schemas.store_settings import StoreSettingsResponse, StoreSettingsUpdateRequest

router = APIRouter(tags=["settings"])


@router.get("/settings", response_model=StoreSettingsResponse, summary="Get Store Settings")
def get_store_settings_endpoint(db: DbSession) -> StoreSettingsResponse:
    return StoreSettingsResponse.model_validate(get_store_settings(db))


@router.put(
    "/settings",
    response_model=StoreSettingsResponse,
    summary="Update Store Settings",
    description="Replaces the store profile shown on the site and used in emails.",
    responses=ADMIN_ERROR_RESPONSES,
)
def update_store_settings_endpoint(
    payload: StoreSettingsUpdateRequest, _: Admin, db: DbSession
) -> StoreSettingsResponse:
    return StoreSettingsResponse.model_validate(update_store_settings(db, payload))
