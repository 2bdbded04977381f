import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Annotated

import jwt
from fastapi import Header
from nacl import pwhash
from nacl.exceptions import CryptoError, InvalidkeyError

from app.core.config import settings
from app.core.errors import raise_http_error

logger = logging.getLogger("spotted.auth")

ADMIN_SESSION_ALGORITHM = "HS256"
ADMIN_SESSION_AUDIENCE = "spotted-admin"
DEVELOPMENT_SESSION_SECRET = "dev-admin-session-secret-change-me"


@dataclass(frozen=True, slots=True)
class AdminContext:
    subject: str
    expires_at: datetime


def _session_secret() -> str:
    secret = settings.admin_session_secret
    if secret is None or not secret.strip():
        return DEVELOPMENT_SESSION_SECRET
    return secret


def validate_admin_auth_config() -> None:
    problems: list[str] = []
    secret = settings.admin_session_secret
    if secret is None or not secret.strip() or secret == DEVELOPMENT_SESSION_SECRET:
        problems.append("ADMIN_SESSION_SECRET is missing or set to a placeholder value")
    if not settings.admin_password_hash:
        problems.append("ADMIN_PASSWORD_HASH is missing")

    if not problems:
        return
    if settings.is_production_like:
        raise RuntimeError("; ".join(problems))

    logger.warning(
        "admin_auth_config_incomplete",
        extra={"event_name": "admin_auth_config_incomplete", "app_env": settings.app_env},
    )


def hash_admin_password(password: str) -> str:
    return pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_admin_password(password: str) -> bool:
    stored = settings.admin_password_hash
    if not stored:
        return False
    try:
        return pwhash.verify(stored.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False
    except (CryptoError, UnicodeEncodeError, ValueError):
        logger.warning("admin_password_hash_unusable", exc_info=True)
        return False


def create_admin_session_token(*, now: datetime | None = None) -> tuple[str, datetime]:
    issued_at = now or datetime.now(tz=UTC)
    expires_at = issued_at + timedelta(hours=settings.admin_session_ttl_hours)
    token = jwt.encode(
        {
            "sub": "admin",
            "aud": ADMIN_SESSION_AUDIENCE,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        },
        _session_secret(),
        algorithm=ADMIN_SESSION_ALGORITHM,
    )
    return token, expires_at


def decode_admin_session_token(token: str) -> AdminContext:
    claims = jwt.decode(
        token,
        _session_secret(),
        algorithms=[ADMIN_SESSION_ALGORITHM],
        audience=ADMIN_SESSION_AUDIENCE,
        options={"require": ["exp", "sub", "aud"]},
    )
    return AdminContext(
        subject=str(claims["sub"]),
        expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=UTC),
    )


def get_admin_context(
    authorization: Annotated[str | None, Header()] = None,
) -> AdminContext:
    if not authorization:
        raise_http_error(401, "AUTH_ADMIN_MISSING", "Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise_http_error(401, "AUTH_ADMIN_INVALID", "Authorization header must be a Bearer token")

    try:
        return decode_admin_session_token(token.strip())
    except jwt.InvalidTokenError:
        raise_http_error(401, "AUTH_ADMIN_INVALID", "Admin session is invalid or expired")
