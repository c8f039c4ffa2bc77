# payana/models/ad.py

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func, false
from payana.utils.database import Base


class Ad(Base):
    __tablename__ = "ads"

    id = Column(Integer, primary_key=True, index=True)
    image_url = Column(Text, nullable=False)
    media_id = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=False, server_default=false())  # активной может быть только одна
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(100), default="admin")
    updated_by = Column(String(100), nullable=True)
