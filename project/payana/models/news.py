# payana/models/news.py

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func, true
from payana.utils.database import Base


class NewsArticle(Base):
    __tablename__ = "news_articles"

    id = Column(Integer, primary_key=True, index=True)
    image_url = Column(Text, nullable=False)
    media_id = Column(String(255), nullable=True)            # public_id в Cloudinary
    date = Column(String(50), nullable=False)                # свободный текст
    time = Column(String(50), nullable=False)                # свободный текст
    description = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)  # список абзацев
    tag = Column(String(100), nullable=False)
    views = Column(Integer, nullable=False, default=0, server_default="0")
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(100), default="admin")
    updated_by = Column(String(100), nullable=True)
