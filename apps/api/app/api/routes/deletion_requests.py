from fastapi import APIRouter, Response, status

from app.api.deps import Admin, DbSession, TokenCodec
from app.core.openapi import ADMIN_ERROR_RESPONSES, LINK_ERROR_RESPONSES
from app.modules.deletion_requests.service import (
    create_deletion_request,
    delete_deletion_request,
    list_deletion_requests,
    review_deletion_request,
)
from app.schemas.deletion_request import (
    DeletionRequestCreateRequest,
    DeletionRequestCreateResponse,
    DeletionRequestResponse,
    DeletionRequestReviewRequest,
)

router = APIRouter(tags=["deletion-requests"])


@router.post(
    "/deletion-requests",
    response_model=DeletionRequestCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request Deletion",
    description=(
        "Opens a deletion request for the product referenced by the capability token. "
        "Returns 200 with `already_requested=true` when one is already pending."
    ),
    responses={
        **LINK_ERROR_RESPONSES,
        200: {"description": "A deletion request for this product is already pending."},
    },
)
def create_deletion_request_endpoint(
    payload: DeletionRequestCreateRequest,
    response: Response,
    db: DbSession,
    codec: TokenCodec,
) -> DeletionRequestCreateResponse:
    outcome = create_deletion_request(db, codec, payload)
    if outcome.already_requested:
        response.status_code = status.HTTP_200_OK
    return DeletionRequestCreateResponse(
        request=DeletionRequestResponse.model_validate(outcome.request),
        already_requested=outcome.already_requested,
        email_sent=outcome.email_sent,
    )


@router.get(
    "/deletion-requests",
    response_model=list[DeletionRequestResponse],
    summary="List Deletion Requests",
    responses=ADMIN_ERROR_RESPONSES,
)
def list_deletion_requests_endpoint(_: Admin, db: DbSession) -> list[DeletionRequestResponse]:
    return [DeletionRequestResponse.model_validate(item) for item in list_deletion_requests(db)]


@router.put(
    "/deletion-requests/{request_id}/status",
    response_model=DeletionRequestResponse,
    summary="Review Deletion Request",
    description="Approving deletes the product; rejecting keeps it published.",
    responses=ADMIN_ERROR_RESPONSES,
)
def review_deletion_request_endpoint(
    request_id: int,
    payload: DeletionRequestReviewRequest,
    _: Admin,
    db: DbSession,
) -> DeletionRequestResponse:
    return DeletionRequestResponse.model_validate(review_deletion_request(db, request_id, payload))


@router.delete(
    "/deletion-requests/{request_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Deletion Request",
    description="Removes the request record; the product is not touched.",
    responses=ADMIN_ERROR_RESPONSES,
)
def delete_deletion_request_endpoint(request_id: int, _: Admin, db: DbSession) -> Response:
    delete_deletion_request(db, request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
