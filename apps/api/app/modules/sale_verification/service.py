import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import raise_product_not_found
from app.core.product_tokens import ProductTokenCodec
from app.db.base import utcnow
from app.models.product import Product
from app.modules.capability_links.service import resolve_token_product
from app.schemas.sale_confirmation import SaleConfirmationRequest, SaleConfirmationResponse

logger = logging.getLogger("spotted.sale_verification")


def confirm_sale(
    db: Session, codec: ProductTokenCodec, payload: SaleConfirmationRequest
) -> SaleConfirmationResponse:
    product = resolve_token_product(db, codec, payload.token, action="sale_confirmation")
    product_id = product.id

    if payload.product_id is not None and payload.product_id != product_id:
        logger.warning(
            "sale_confirmation_body_product_ignored",
            extra={
                "event_name": "sale_confirmation_body_product_ignored",
                "product_id": product_id,
                "body_product_id": payload.product_id,
            },
        )

    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.sale_verified.is_(False))
        .values(
            is_sold=True,
            sale_verified=True,
            sale_verification_comment=payload.comment,
            sale_verified_at=utcnow(),
        )
    )
    db.commit()
    already_verified = result.rowcount == 0

    refreshed = db.scalar(
        select(Product)
        .where(Product.id == product_id)
        .execution_options(populate_existing=True)
    )
    if refreshed is None:
        raise_product_not_found()

    logger.info(
        "sale_confirmed",
        extra={
            "event_name": "sale_confirmed",
            "product_id": product_id,
            "outcome": "already_verified" if already_verified else "verified",
        },
    )
    return SaleConfirmationResponse(
        product_id=refreshed.id,
        is_sold=refreshed.is_sold,
        sale_verified=refreshed.sale_verified,
        sale_verified_at=refreshed.sale_verified_at,
        comment=refreshed.sale_verification_comment,
        already_verified=already_verified,
    )
