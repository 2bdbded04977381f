from typing import Literal

from pydantic import BaseModel


class TokenValidationResponse(BaseModel):
    valid: bool
    status: Literal["valid", "invalid", "not_found"]
    product_id: int | None = None
    product_title: str | None = None
