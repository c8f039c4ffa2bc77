# payana/models/testimonial.py

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func, true
from payana.utils.database import Base


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)
    video_url = Column(Text, nullable=False)
    media_id = Column(String(255), nullable=True)
    name = Column(String(100), nullable=False)
    prefix = Column(String(10), default="None")              # Mr / Ms / Dr ... или "None"
    views = Column(Integer, nullable=False, default=0, server_default="0")
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    display_order = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(100), default="admin")
    updated_by = Column(String(100), nullable=True)
