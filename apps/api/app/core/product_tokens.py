"""Signed, time-limited capability tokens for product owner actions.

A token authorizes whoever holds it to act on one product (confirm its sale
or ask for its deletion) without an account. It is the base64url form of
``"{issued_at_ms}:{hmac_sha256_hex}:{product_id}"`` where the HMAC covers
``"{product_id}:{issued_at_ms}"``. Tokens are stateless: validating one never
touches the database.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from app.core.config import settings
from app.core.reason_codes import ReasonCode

logger = logging.getLogger("spotted.product_tokens")

DEFAULT_MAX_AGE = timedelta(days=30)
DEFAULT_FUTURE_SKEW = timedelta(minutes=5)
MIN_SECRET_LENGTH = 32
MAX_TOKEN_LENGTH = 512

DEVELOPMENT_SECRET = "dev-product-token-secret-change-me"
PLACEHOLDER_SECRETS = frozenset(
    {
        "",
        DEVELOPMENT_SECRET,
        "your-secure-secret-key-change-this",
        "change-me",
        "changeme",
        "secret",
    }
)

_TOKEN_ALPHABET = re.compile(r"[A-Za-z0-9_-]+")
_CANONICAL_INT = re.compile(r"0|[1-9][0-9]{0,18}")
_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


def now_millis() -> int:
    return int(datetime.now(tz=UTC).timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class TokenCheck:
    product_id: int | None
    reason_code: ReasonCode | None = None
    issued_at_ms: int | None = None

    @property
    def is_valid(self) -> bool:
        return self.product_id is not None


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64url_decode_strict(token: str) -> bytes | None:
    if not _TOKEN_ALPHABET.fullmatch(token):
        return None
    padding = "=" * ((4 - len(token) % 4) % 4)
    try:
        raw = base64.urlsafe_b64decode(token + padding)
    except (binascii.Error, ValueError):
        return None
    # Reject encodings whose unused trailing bits differ from the canonical form.
    if _b64url_encode(raw) != token:
        return None
    return raw


class ProductTokenCodec:
    def __init__(
        self,
        secret: str,
        *,
        max_age: timedelta = DEFAULT_MAX_AGE,
        future_skew: timedelta = DEFAULT_FUTURE_SKEW,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        if not secret:
            raise ValueError("product token secret must not be empty")
        self._key = secret.encode("utf-8")
        self._max_age_ms = int(max_age.total_seconds() * 1000)
        self._future_skew_ms = int(future_skew.total_seconds() * 1000)
        self._clock = clock

    def _sign(self, product_id: int, issued_at_ms: int) -> str:
        message = f"{product_id}:{issued_at_ms}".encode("ascii")
        return hmac.new(self._key, message, hashlib.sha256).hexdigest()

    def mint(self, product_id: int) -> str:
        if isinstance(product_id, bool) or not isinstance(product_id, int) or product_id <= 0:
            raise ValueError("product_id must be a positive integer")
        issued_at_ms = self._clock()
        signature = self._sign(product_id, issued_at_ms)
        return _b64url_encode(f"{issued_at_ms}:{signature}:{product_id}".encode("ascii"))

    def inspect(self, token: str) -> TokenCheck:
        """Decode and authenticate ``token``, reporting why it was rejected.

        Never raises; every failure is returned as a ``TokenCheck`` without a
        product id. The reason is meant for logs only.
        """
        if not isinstance(token, str) or not token or len(token) > MAX_TOKEN_LENGTH:
            return TokenCheck(product_id=None, reason_code=ReasonCode.TOKEN_MALFORMED)

        raw = _b64url_decode_strict(token)
        if raw is None:
            return TokenCheck(product_id=None, reason_code=ReasonCode.TOKEN_MALFORMED)

        try:
            decoded = raw.decode("ascii")
        except UnicodeDecodeError:
            return TokenCheck(product_id=None, reason_code=ReasonCode.TOKEN_MALFORMED)

        parts = decoded.split(":")
        if len(parts) != 3:
            return TokenCheck(product_id=None, reason_code=ReasonCode.TOKEN_MALFORMED)

        issued_at_raw, signature, product_id_raw = parts
        if not (
            _CANONICAL_INT.fullmatch(issued_at_raw)
            and _CANONICAL_INT.fullmatch(product_id_raw)
            and _HEX_DIGEST.fullmatch(signature)
        ):
            return TokenCheck(product_id=None, reason_code=ReasonCode.TOKEN_MALFORMED)

        issued_at_ms = int(issued_at_raw)
        product_id = int(product_id_raw)
        if product_id <= 0:
            return TokenCheck(product_id=None, reason_code=ReasonCode.TOKEN_MALFORMED)

        expected = self._sign(product_id, issued_at_ms)
        if not hmac.compare_digest(expected, signature):
            return TokenCheck(
                product_id=None,
                reason_code=ReasonCode.TOKEN_SIGNATURE_INVALID,
                issued_at_ms=issued_at_ms,
            )

        elapsed_ms = self._clock() - issued_at_ms
        if elapsed_ms > self._max_age_ms:
            return TokenCheck(
                product_id=None,
                reason_code=ReasonCode.TOKEN_EXPIRED,
                issued_at_ms=issued_at_ms,
            )
        if -elapsed_ms > self._future_skew_ms:
            return TokenCheck(
                product_id=None,
                reason_code=ReasonCode.TOKEN_ISSUED_IN_FUTURE,
                issued_at_ms=issued_at_ms,
            )

        return TokenCheck(product_id=product_id, issued_at_ms=issued_at_ms)

    def validate(self, token: str) -> int | None:
        return self.inspect(token).product_id


def _configured_secret() -> str:
    secret = settings.product_token_secret
    if secret is None or not secret.strip():
        return DEVELOPMENT_SECRET
    return secret


def validate_product_token_config() -> None:
    secret = settings.product_token_secret
    problem: str | None = None
    if secret is None or secret.strip() in PLACEHOLDER_SECRETS:
        problem = "PRODUCT_TOKEN_SECRET is missing or set to a placeholder value"
    elif len(secret) < MIN_SECRET_LENGTH:
        problem = f"PRODUCT_TOKEN_SECRET must be at least {MIN_SECRET_LENGTH} characters"

    if problem is None:
        return

    if settings.is_production_like:
        raise RuntimeError(problem)

    logger.warning(
        "product_token_secret_insecure",
        extra={"event_name": "product_token_secret_insecure", "app_env": settings.app_env},
    )


@lru_cache(maxsize=1)
def get_product_token_codec() -> ProductTokenCodec:
    return ProductTokenCodec(
        _configured_secret(),
        max_age=timedelta(days=settings.product_token_max_age_days),
        future_skew=timedelta(seconds=settings.product_token_future_skew_seconds),
    )
