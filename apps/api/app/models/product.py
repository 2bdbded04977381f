from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    submitter_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    is_sold: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    sale_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    sale_verification_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    sale_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    views: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    clicks: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
