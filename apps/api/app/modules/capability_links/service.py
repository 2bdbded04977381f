import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import raise_invalid_link, raise_product_not_found
from app.core.product_tokens import ProductTokenCodec
from app.models.product import Product
from app.schemas.token_validation import TokenValidationResponse

logger = logging.getLogger("spotted.capability_links")


def _load_product(db: Session, product_id: int) -> Product | None:
    return db.scalar(
        select(Product)
        .where(Product.id == product_id)
        .execution_options(populate_existing=True)
    )


def issue_product_token(codec: ProductTokenCodec, *, product_id: int) -> str:
    token = codec.mint(product_id)
    logger.info(
        "product_token_minted",
        extra={"event_name": "product_token_minted", "product_id": product_id},
    )
    return token


def resolve_token_product(
    db: Session, codec: ProductTokenCodec, token: str, *, action: str
) -> Product:
    """Return the product a capability token points at.

    The product id always comes from the validated token. Invalid tokens and
    missing products raise distinct HTTP errors.
    """
    check = codec.inspect(token)
    if check.product_id is None:
        logger.warning(
            "product_token_rejected",
            extra={
                "event_name": "product_token_rejected",
                "reason_code": check.reason_code,
                "outcome": action,
            },
        )
        raise_invalid_link()

    product = _load_product(db, check.product_id)
    if product is None:
        logger.info(
            "product_token_target_missing",
            extra={
                "event_name": "product_token_target_missing",
                "product_id": check.product_id,
                "outcome": action,
            },
        )
        raise_product_not_found()

    return product


def describe_token(db: Session, codec: ProductTokenCodec, token: str) -> TokenValidationResponse:
    check = codec.inspect(token)
    if check.product_id is None:
        logger.info(
            "product_token_checked",
            extra={
                "event_name": "product_token_checked",
                "reason_code": check.reason_code,
                "outcome": "invalid",
            },
        )
        return TokenValidationResponse(valid=False, status="invalid")

    product = _load_product(db, check.product_id)
    if product is None:
        logger.info(
            "product_token_checked",
            extra={
                "event_name": "product_token_checked",
                "product_id": check.product_id,
                "outcome": "not_found",
            },
        )
        return TokenValidationResponse(valid=False, status="not_found")

    return TokenValidationResponse(
        valid=True,
        status="valid",
        product_id=product.id,
        product_title=product.title,
    )
