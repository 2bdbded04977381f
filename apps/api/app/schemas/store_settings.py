from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StoreSettingsUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    store_name: str = Field(min_length=1, max_length=200)
    contact_phone: str = Field(max_length=40)
    store_description: str


class StoreSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    store_name: str
    contact_phone: str
    store_description: str
    updated_at: datetime | None = None
