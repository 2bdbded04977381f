import logging
from typing import Literal

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import raise_http_error
from app.models.product import Product
from app.models.product_interaction import ProductInteraction
from app.schemas.product import ProductCreateRequest, ProductSort, ProductUpdateRequest

logger = logging.getLogger("spotted.catalog")

InteractionKind = Literal["view", "click"]

# A click weighs twice a view.
POPULARITY_SCORE = Product.views + Product.clicks * 2

_ORDERINGS = {
    "newest": (Product.created_at.desc(), Product.id.desc()),
    "price_asc": (Product.price.asc(), Product.id.asc()),
    "price_desc": (Product.price.desc(), Product.id.desc()),
    "popularity": (POPULARITY_SCORE.desc(), Product.id.desc()),
}

_COUNTERS = {
    "view": Product.views,
    "click": Product.clicks,
}

USER_AGENT_MAX_LENGTH = 500


def list_products(db: Session, *, sort: ProductSort = "newest") -> list[Product]:
    return list(db.scalars(select(Product).order_by(*_ORDERINGS[sort])).all())


def get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise_http_error(404, "PRODUCT_NOT_FOUND", "Product not found")
    return product


def create_product(db: Session, payload: ProductCreateRequest) -> Product:
    product = Product(**payload.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info(
        "product_created",
        extra={"event_name": "product_created", "product_id": product.id},
    )
    return product


def update_product(db: Session, product_id: int, payload: ProductUpdateRequest) -> Product:
    product = get_product_or_404(db, product_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> None:
    result = db.execute(delete(Product).where(Product.id == product_id))
    if result.rowcount == 0:
        db.rollback()
        raise_http_error(404, "PRODUCT_NOT_FOUND", "Product not found")
    db.commit()
    logger.info(
        "product_deleted",
        extra={"event_name": "product_deleted", "product_id": product_id},
    )


def record_interaction(
    db: Session,
    product_id: int,
    *,
    kind: InteractionKind,
    ip_address: str | None,
    user_agent: str | None,
) -> bool:
    """Count a view or click once per client address; returns whether it was counted."""
    get_product_or_404(db, product_id)
    db.add(
        ProductInteraction(
            product_id=product_id,
            kind=kind,
            ip_address=ip_address,
            user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
        )
    )
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        return False

    counter = _COUNTERS[kind]
    db.execute(update(Product).where(Product.id == product_id).values({counter: counter + 1}))
    db.commit()
    logger.info(
        "product_interaction_recorded",
        extra={
            "event_name": "product_interaction_recorded",
            "product_id": product_id,
            "outcome": kind,
        },
    )
    return True
