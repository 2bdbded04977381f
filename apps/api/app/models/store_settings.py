from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow

STORE_SETTINGS_ID = 1


class StoreSettings(Base):
    __tablename__ = "store_settings"

    # Single row, always id 1.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    store_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(40), nullable=False)
    store_description: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
