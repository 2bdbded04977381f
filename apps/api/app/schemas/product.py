from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProductSort = Literal["newest", "price_asc", "price_desc", "popularity"]


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: int = Field(ge=0)
    category: str = Field(min_length=1, max_length=100)
    image_url: str | None = None
    contact_phone: str | None = Field(default=None, max_length=40)
    submitter_email: str | None = Field(default=None, max_length=320)


class ProductUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    price: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    image_url: str | None = None
    contact_phone: str | None = Field(default=None, max_length=40)
    is_sold: bool | None = None

    @field_validator("title", "description", "price", "category", "is_sold")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        # Omit a field to keep it; these columns cannot be cleared.
        if value is None:
            raise ValueError("must not be null")
        return value


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    price: int
    category: str
    image_url: str | None
    contact_phone: str | None
    is_sold: bool
    sale_verified: bool
    sale_verified_at: datetime | None
    created_at: datetime
    views: int
    clicks: int


class ProductStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int = Field(validation_alias="id")
    views: int
    clicks: int
