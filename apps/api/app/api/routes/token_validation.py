from fastapi import APIRouter

from app.api.deps import DbSession, TokenCodec
from app.modules.capability_links.service import describe_token
from app.schemas.token_validation import TokenValidationResponse

router = APIRouter(tags=["owner-actions"])


@router.get(
    "/token-validation/{token}",
    response_model=TokenValidationResponse,
    summary="Check Owner Link",
    description="Read-only check used by the UI before an owner commits to an action.",
)
def token_validation_endpoint(
    token: str, db: DbSession, codec: TokenCodec
) -> TokenValidationResponse:
    return describe_token(db, codec, token)
