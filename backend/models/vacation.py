# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Vacation ORM model."""

from sqlalchemy import Column, Integer, String, Text, Date, Float, DateTime
from sqlalchemy.sql import func

from database import Base

STATUS_ACTIVE = 1
STATUS_DELETED = 0


class Vacation(Base):
    __tablename__ = "vacation"

    id = Column(Integer, primary_key=True, autoincrement=True)
    destination = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    price = Column(Float, nullable=False)
    # File name only; the file lives in settings.image_dir
    image = Column(String(255), nullable=False)
    # Soft delete: rows are never removed, status flips to STATUS_DELETED
    status = Column(Integer, nullable=False, default=STATUS_ACTIVE, server_default="1", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
