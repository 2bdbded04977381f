from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SaleConfirmationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Length and shape are validated by the token codec.
    token: str
    comment: str | None = Field(default=None, max_length=2000)
    # Sent by older clients; the token decides which product is touched.
    product_id: int | None = None


class SaleConfirmationResponse(BaseModel):
    product_id: int
    is_sold: bool
    sale_verified: bool
    sale_verified_at: datetime | None
    comment: str | None
    already_verified: bool
