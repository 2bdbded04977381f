import hmac
import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import raise_http_error
from app.core.product_tokens import ProductTokenCodec
from app.db.base import utcnow
from app.models.deletion_request import DeletionRequest
from app.models.product import Product
from app.modules.capability_links.service import resolve_token_product
from app.modules.notifications.service import (
    send_deletion_decision_email,
    send_deletion_received_email,
)
from app.modules.store_settings.service import current_store_name
from app.schemas.deletion_request import DeletionRequestCreateRequest, DeletionRequestReviewRequest

logger = logging.getLogger("spotted.deletion_requests")


@dataclass(frozen=True, slots=True)
class DeletionRequestOutcome:
    request: DeletionRequest
    already_requested: bool
    email_sent: bool


def _normalize_email(value: str) -> bytes:
    return value.strip().lower().encode("utf-8")


def _verify_legacy_submitter(db: Session, *, product_id: int, submitter_email: str) -> Product:
    if not settings.allow_legacy_deletion_requests:
        raise_http_error(
            403,
            "LEGACY_DELETION_PATH_DISABLED",
            "Deletion requests require the link sent by email",
        )

    product = db.get(Product, product_id)
    stored_email = product.submitter_email if product is not None else None
    # Unknown products and wrong emails answer the same way.
    if product is None or not stored_email or not hmac.compare_digest(
        _normalize_email(stored_email), _normalize_email(submitter_email)
    ):
        logger.warning(
            "legacy_deletion_request_rejected",
            extra={"event_name": "legacy_deletion_request_rejected", "product_id": product_id},
        )
        raise_http_error(
            403,
            "SUBMITTER_VERIFICATION_FAILED",
            "Could not verify the submitter of this listing",
        )

    logger.warning(
        "legacy_deletion_request_used",
        extra={"event_name": "legacy_deletion_request_used", "product_id": product_id},
    )
    return product


def _pending_request(db: Session, product_id: int) -> DeletionRequest | None:
    return db.scalar(
        select(DeletionRequest).where(
            DeletionRequest.product_id == product_id,
            DeletionRequest.status == "pending",
        )
    )


def _already_requested(request: DeletionRequest) -> DeletionRequestOutcome:
    logger.info(
        "deletion_request_already_pending",
        extra={
            "event_name": "deletion_request_already_pending",
            "product_id": request.product_id,
            "deletion_request_id": request.id,
        },
    )
    return DeletionRequestOutcome(request=request, already_requested=True, email_sent=False)


def create_deletion_request(
    db: Session, codec: ProductTokenCodec, payload: DeletionRequestCreateRequest
) -> DeletionRequestOutcome:
    if payload.token is not None:
        product = resolve_token_product(db, codec, payload.token, action="deletion_request")
        via_token = True
    else:
        if payload.product_id is None or payload.submitter_email is None:
            raise_http_error(422, "VALIDATION_ERROR", "product_id and submitter_email are required")
        product = _verify_legacy_submitter(
            db, product_id=payload.product_id, submitter_email=payload.submitter_email
        )
        via_token = False

    product_id = product.id
    product_title = product.title
    submitter_email = product.submitter_email

    existing = _pending_request(db, product_id)
    if existing is not None:
        return _already_requested(existing)

    request = DeletionRequest(
        product_id=product_id,
        product_title=product_title,
        submitter_email=submitter_email,
        reason=payload.reason,
        status="pending",
        via_token=via_token,
    )
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent submit won the partial unique index.
        db.rollback()
        existing = _pending_request(db, product_id)
        if existing is None:
            raise
        return _already_requested(existing)
    db.refresh(request)

    logger.info(
        "deletion_request_created",
        extra={
            "event_name": "deletion_request_created",
            "product_id": product_id,
            "deletion_request_id": request.id,
        },
    )

    email_sent = False
    if submitter_email:
        email_sent = send_deletion_received_email(
            to=submitter_email,
            product_title=product_title,
            reason=payload.reason,
            store_name=current_store_name(db),
        )
    return DeletionRequestOutcome(request=request, already_requested=False, email_sent=email_sent)


def list_deletion_requests(db: Session) -> list[DeletionRequest]:
    return list(
        db.scalars(
            select(DeletionRequest).order_by(
                DeletionRequest.submitted_at.asc(), DeletionRequest.id.asc()
            )
        ).all()
    )


def review_deletion_request(
    db: Session, request_id: int, payload: DeletionRequestReviewRequest
) -> DeletionRequest:
    result = db.execute(
        update(DeletionRequest)
        .where(DeletionRequest.id == request_id, DeletionRequest.status == "pending")
        .values(status=payload.status, reviewed_at=utcnow(), admin_notes=payload.admin_notes)
    )
    if result.rowcount == 0:
        db.rollback()
        if db.get(DeletionRequest, request_id) is None:
            raise_http_error(404, "DELETION_REQUEST_NOT_FOUND", "Deletion request not found")
        raise_http_error(409, "REQUEST_ALREADY_REVIEWED", "Deletion request was already reviewed")

    request = db.scalar(
        select(DeletionRequest)
        .where(DeletionRequest.id == request_id)
        .execution_options(populate_existing=True)
    )
    if request is None:
        db.rollback()
        raise_http_error(404, "DELETION_REQUEST_NOT_FOUND", "Deletion request not found")

    approved = payload.status == "approved"
    if approved:
        db.execute(delete(Product).where(Product.id == request.product_id))
    db.commit()
    db.refresh(request)

    logger.info(
        "deletion_request_reviewed",
        extra={
            "event_name": "deletion_request_reviewed",
            "deletion_request_id": request.id,
            "product_id": request.product_id,
            "outcome": payload.status,
        },
    )

    if request.submitter_email:
        send_deletion_decision_email(
            to=request.submitter_email,
            product_title=request.product_title,
            approved=approved,
            admin_notes=payload.admin_notes,
            store_name=current_store_name(db),
        )
    return request


def delete_deletion_request(db: Session, request_id: int) -> None:
    # Removing a pending request frees the product for a new one.
    result = db.execute(delete(DeletionRequest).where(DeletionRequest.id == request_id))
    if result.rowcount == 0:
        db.rollback()
        raise_http_error(404, "DELETION_REQUEST_NOT_FOUND", "Deletion request not found")
    db.commit()
    logger.info(
        "deletion_request_deleted",
        extra={"event_name": "deletion_request_deleted", "deletion_request_id": request_id},
    )
