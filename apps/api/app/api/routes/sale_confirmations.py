from fastapi import APIRouter

from app.api.deps import DbSession, TokenCodec
from app.core.openapi import LINK_ERROR_RESPONSES
from app.modules.sale_verification.service import confirm_sale
from app.schemas.sale_confirmation import SaleConfirmationRequest, SaleConfirmationResponse

router = APIRouter(tags=["owner-actions"])


@router.post(
    "/sale-confirmations",
    response_model=SaleConfirmationResponse,
    summary="Confirm Sale",
    description=(
        "Marks the product referenced by the capability token as sold and verified. "
        "Confirming an already verified sale is a no-op."
    ),
    responses=LINK_ERROR_RESPONSES,
)
def confirm_sale_endpoint(
    payload: SaleConfirmationRequest, db: DbSession, codec: TokenCodec
) -> SaleConfirmationResponse:
    return confirm_sale(db, codec, payload)
