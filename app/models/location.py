from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Location(Base):
    """One administrative district with its city and province denormalized."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    province_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    province_name: Mapped[str] = mapped_column(String(100), nullable=False)
    city_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    city_name: Mapped[str] = mapped_column(String(100), nullable=False)
    city_type: Mapped[str] = mapped_column(String(20), default="KOTA")  # KOTA, KABUPATEN
    district_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    district_name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
