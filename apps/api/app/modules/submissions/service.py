import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.core.errors import raise_http_error
from app.core.product_tokens import ProductTokenCodec
from app.db.base import utcnow
from app.models.product import Product
from app.models.product_request import ProductRequest
from app.modules.capability_links.service import issue_product_token
from app.modules.notifications.service import (
    send_approval_email,
    send_submission_rejected_email,
)
from app.modules.store_settings.service import current_store_name
from app.schemas.product_request import ProductRequestCreateRequest, ProductRequestReviewRequest

logger = logging.getLogger("spotted.submissions")

DEFAULT_REJECTION_REASON = "The submission does not meet the catalog rules."


@dataclass(frozen=True, slots=True)
class ReviewOutcome:
    request: ProductRequest
    product: Product | None
    email_sent: bool


def create_product_request(db: Session, payload: ProductRequestCreateRequest) -> ProductRequest:
    request = ProductRequest(**payload.model_dump(), status="pending")
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info(
        "product_request_submitted",
        extra={"event_name": "product_request_submitted", "product_request_id": request.id},
    )
    return request


def list_product_requests(db: Session) -> list[ProductRequest]:
    return list(
        db.scalars(
            select(ProductRequest).order_by(
                ProductRequest.submitted_at.asc(), ProductRequest.id.asc()
            )
        ).all()
    )


def _claim_for_review(db: Session, request_id: int, payload: ProductRequestReviewRequest) -> None:
    result = db.execute(
        update(ProductRequest)
        .where(ProductRequest.id == request_id, ProductRequest.status == "pending")
        .values(status=payload.status, reviewed_at=utcnow(), admin_notes=payload.admin_notes)
    )
    if result.rowcount == 0:
        db.rollback()
        if db.get(ProductRequest, request_id) is None:
            raise_http_error(404, "PRODUCT_REQUEST_NOT_FOUND", "Product request not found")
        raise_http_error(409, "REQUEST_ALREADY_REVIEWED", "Product request was already reviewed")


def review_product_request(
    db: Session,
    codec: ProductTokenCodec,
    request_id: int,
    payload: ProductRequestReviewRequest,
) -> ReviewOutcome:
    _claim_for_review(db, request_id, payload)
    request = db.scalar(
        select(ProductRequest)
        .where(ProductRequest.id == request_id)
        .execution_options(populate_existing=True)
    )
    if request is None:
        db.rollback()
        raise_http_error(404, "PRODUCT_REQUEST_NOT_FOUND", "Product request not found")

    if payload.status == "rejected":
        db.commit()
        db.refresh(request)
        logger.info(
            "product_request_rejected",
            extra={"event_name": "product_request_rejected", "product_request_id": request.id},
        )
        email_sent = False
        if request.submitter_email:
            email_sent = send_submission_rejected_email(
                to=request.submitter_email,
                product_title=request.title,
                reason=payload.admin_notes or DEFAULT_REJECTION_REASON,
                store_name=current_store_name(db),
            )
        return ReviewOutcome(request=request, product=None, email_sent=email_sent)

    product = Product(
        title=request.title,
        description=request.description,
        price=request.price,
        category=request.category,
        image_url=request.image_url,
        contact_phone=request.contact_phone,
        submitter_email=request.submitter_email,
    )
    db.add(product)
    db.flush()
    request.product_id = product.id
    db.commit()
    db.refresh(request)
    db.refresh(product)

    logger.info(
        "product_request_approved",
        extra={
            "event_name": "product_request_approved",
            "product_request_id": request.id,
            "product_id": product.id,
        },
    )

    email_sent = False
    if request.submitter_email:
        token = issue_product_token(codec, product_id=product.id)
        email_sent = send_approval_email(
            to=request.submitter_email,
            product_title=product.title,
            token=token,
            store_name=current_store_name(db),
        )
    return ReviewOutcome(request=request, product=product, email_sent=email_sent)


def delete_product_request(db: Session, request_id: int) -> None:
    # The published product, if any, is left in place.
    result = db.execute(delete(ProductRequest).where(ProductRequest.id == request_id))
    if result.rowcount == 0:
        db.rollback()
        raise_http_error(404, "PRODUCT_REQUEST_NOT_FOUND", "Product request not found")
    db.commit()
    logger.info(
        "product_request_deleted",
        extra={"event_name": "product_request_deleted", "product_request_id": request_id},
    )
