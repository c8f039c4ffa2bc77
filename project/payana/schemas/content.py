# payana/schemas/content.py

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

# ────────────── Новости ──────────────

class NewsArticle(BaseModel):
    """Полная запись статьи (админка)."""
    id: int
    image_url: str
    media_id: Optional[str] = None
    date: str
    time: str
    description: List[str]
    tag: str
    views: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class PublicNewsArticle(BaseModel):
    """Статья для сайта: без служебных полей."""
    id: int
    image: str
    date: str
    time: str
    description: List[str]
    tag: str
    views: int = 0


class TopArticle(BaseModel):
    id: int
    tag: str
    views: int
    date: str

    model_config = {
        "from_attributes": True
    }

# ────────────── Отзывы ──────────────

class Testimonial(BaseModel):
    id: int
    video_url: str
    media_id: Optional[str] = None
    name: str
    prefix: Optional[str] = None
    views: int = 0
    is_active: bool = True
    display_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class PublicTestimonial(BaseModel):
    id: int
    video_url: str
    name: str
    prefix: Optional[str] = None
    views: int = 0

    model_config = {
        "from_attributes": True
    }


class TopTestimonial(BaseModel):
    id: int
    name: str
    prefix: Optional[str] = None
    views: int

    model_config = {
        "from_attributes": True
    }


class OrderItem(BaseModel):
    id: int
    order: int


class ReorderRequest(BaseModel):
    order: List[OrderItem] = Field(..., description="Новый порядок: [{id, order}]")

# ────────────── Реклама ──────────────

class Ad(BaseModel):
    id: int
    image_url: str
    media_id: Optional[str] = None
    is_active: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class ActiveAd(BaseModel):
    id: int
    image_url: str

    model_config = {
        "from_attributes": True
    }
