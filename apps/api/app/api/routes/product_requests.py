from fastapi import APIRouter, Response, status

from app.api.deps import Admin, DbSession, TokenCodec
from app.core.openapi import ADMIN_ERROR_RESPONSES
from app.modules.submissions.service import (
    create_product_request,
    delete_product_request,
    list_product_requests,
    review_product_request,
)
from app.schemas.product import ProductResponse
from app.schemas.product_request import (
    ProductRequestCreateRequest,
    ProductRequestResponse,
    ProductRequestReviewRequest,
    ProductRequestReviewResponse,
)

router = APIRouter(tags=["product-requests"])


@router.post(
    "/product-requests",
    response_model=ProductRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Listing",
)
def create_product_request_endpoint(
    payload: ProductRequestCreateRequest, db: DbSession
) -> ProductRequestResponse:
    return ProductRequestResponse.model_validate(create_product_request(db, payload))


@router.get(
    "/product-requests",
    response_model=list[ProductRequestResponse],
    summary="List Submissions",
    responses=ADMIN_ERROR_RESPONSES,
)
def list_product_requests_endpoint(_: Admin, db: DbSession) -> list[ProductRequestResponse]:
    return [ProductRequestResponse.model_validate(item) for item in list_product_requests(db)]


@router.put(
    "/product-requests/{request_id}/status",
    response_model=ProductRequestReviewResponse,
    summary="Review Submission",
    description=(
        "Approving publishes the listing and emails the submitter owner links; "
        "rejecting emails the admin notes as the reason."
    ),
    responses=ADMIN_ERROR_RESPONSES,
)
def review_product_request_endpoint(
    request_id: int,
    payload: ProductRequestReviewRequest,
    _: Admin,
    db: DbSession,
    codec: TokenCodec,
) -> ProductRequestReviewResponse:
    outcome = review_product_request(db, codec, request_id, payload)
    return ProductRequestReviewResponse(
        request=ProductRequestResponse.model_validate(outcome.request),
        product=ProductResponse.model_validate(outcome.product) if outcome.product else None,
        email_sent=outcome.email_sent,
    )


@router.delete(
    "/product-requests/{request_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Submission",
    description="Removes the submission record; a listing it published stays live.",
    responses=ADMIN_ERROR_RESPONSES,
)
def delete_product_request_endpoint(request_id: int, _: Admin, db: DbSession) -> Response:
    delete_product_request(db, request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
