import logging

from fastapi import APIRouter

from app.core.auth import create_admin_session_token, verify_admin_password
from app.core.errors import raise_http_error
from app.schemas.admin import AdminLoginRequest, AdminLoginResponse

router = APIRouter(tags=["admin"])
logger = logging.getLogger("spotted.admin")


@router.post(
    "/admin/login",
    response_model=AdminLoginResponse,
    summary="Admin Login",
    description="Exchanges the admin password for a short-lived Bearer session token.",
)
def admin_login_endpoint(payload: AdminLoginRequest) -> AdminLoginResponse:
    if not verify_admin_password(payload.password):
        logger.warning(
            "admin_login_failed",
            extra={"event_name": "admin_login_failed", "outcome": "denied"},
        )
        raise_http_error(401, "ADMIN_PASSWORD_INVALID", "Invalid admin password")

    token, expires_at = create_admin_session_token()
    logger.info("admin_login", extra={"event_name": "admin_login", "outcome": "granted"})
    return AdminLoginResponse(access_token=token, expires_at=expires_at)
