from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.product_request import ReviewStatus


class DeletionRequestCreateRequest(BaseModel):
    """Either ``token`` alone, or the deprecated ``product_id`` + ``submitter_email`` pair."""

    model_config = ConfigDict(extra="forbid")

    token: str | None = None
    product_id: int | None = Field(default=None, gt=0)
    submitter_email: str | None = Field(default=None, min_length=3, max_length=320)
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def _check_shape(self) -> "DeletionRequestCreateRequest":
        if self.token is not None:
            if self.product_id is not None or self.submitter_email is not None:
                raise ValueError("token requests must not carry product_id or submitter_email")
            return self
        if self.product_id is None or self.submitter_email is None:
            raise ValueError("provide token, or product_id together with submitter_email")
        return self


class DeletionRequestReviewRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ReviewStatus
    admin_notes: str | None = None


class DeletionRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    product_title: str
    submitter_email: str | None
    reason: str | None
    status: str
    via_token: bool
    submitted_at: datetime
    reviewed_at: datetime | None
    admin_notes: str | None


class DeletionRequestCreateResponse(BaseModel):
    request: DeletionRequestResponse
    already_requested: bool
    email_sent: bool
