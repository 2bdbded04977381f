from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.product import ProductResponse

ReviewStatus = Literal["approved", "rejected"]


class ProductRequestCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: int = Field(ge=0)
    category: str = Field(min_length=1, max_length=100)
    image_url: str | None = None
    contact_phone: str = Field(min_length=1, max_length=40)
    submitter_name: str = Field(min_length=1, max_length=200)
    submitter_email: str | None = Field(
        default=None, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )


class ProductRequestReviewRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ReviewStatus
    admin_notes: str | None = None


class ProductRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    price: int
    category: str
    image_url: str | None
    contact_phone: str
    submitter_name: str
    submitter_email: str | None
    status: str
    submitted_at: datetime
    reviewed_at: datetime | None
    admin_notes: str | None
    product_id: int | None


class ProductRequestReviewResponse(BaseModel):
    request: ProductRequestResponse
    product: ProductResponse | None = None
    email_sent: bool
