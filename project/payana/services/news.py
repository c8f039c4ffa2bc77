# payana/services/news.py

from typing import Optional

from fastapi import Request
from sqlalchemy import func
from sqlalchemy.future import select

from payana.models.news import NewsArticle
from payana.schemas.content import PublicNewsArticle, TopArticle
from payana.services.media import IMAGE
from payana.services.content import (
    get_or_404,
    parse_description,
    plain_numbers,
    replace_media,
    view_stats_columns,
)
from payana.utils.errors import ValidationError
from payana.utils.uploads import UploadedFile

NOT_FOUND = "Article not found"


async def read_public_news_service(request: Request) -> list[PublicNewsArticle]:
    """
    Активные статьи для сайта, новые сверху, без служебных полей.
    """
    db = request.state.db
    result = await db.execute(
        select(NewsArticle)
        .where(NewsArticle.is_active.is_(True))
        .order_by(NewsArticle.created_at.desc(), NewsArticle.id.desc())
    )
    return [
        PublicNewsArticle(
            id=a.id,
            image=a.image_url,
            date=a.date,
            time=a.time,
            description=a.description,
            tag=a.tag,
            views=a.views,
        )
        for a in result.scalars().all()
    ]


async def read_news_service(request: Request) -> list[NewsArticle]:
    """Все статьи для админки."""
    db = request.state.db
    result = await db.execute(
        select(NewsArticle).order_by(NewsArticle.created_at.desc(), NewsArticle.id.desc())
    )
    articles = result.scalars().all()
    await request.app.state.log.log_info("news", f"{len(articles)} статей загружено")
    return articles


async def create_news_service(
    request: Request,
    image: Optional[UploadedFile],
    date: Optional[str],
    time: Optional[str],
    description: Optional[str],
    tag: Optional[str],
) -> NewsArticle:
    """
    Создание статьи: картинка обязательна, затем date, time, description, tag.
    """
    db = request.state.db
    log = request.app.state.log

    if image is None:
        raise ValidationError("Image is required")
    if not date or not time or not description or not tag:
        raise ValidationError("All fields are required")

    asset = await request.app.state.media.upload_image(image.data)

    article = NewsArticle(
        image_url=asset.url,
        media_id=asset.media_id,
        date=date,
        time=time,
        description=parse_description(description),
        tag=tag,
    )
    db.add(article)
    await db.commit()
    await db.refresh(article)

    await log.log_info("news", "Статья создана", {"id": article.id})
    return article


async def update_news_service(
    id: int,
    request: Request,
    image: Optional[UploadedFile],
    date: Optional[str],
    time: Optional[str],
    description: Optional[str],
    tag: Optional[str],
) -> NewsArticle:
    """
    Обновление статьи. Переданные поля заменяют старые, остальные
    остаются как были. Новая картинка заменяет старую.
    """
    db = request.state.db
    log = request.app.state.log

    article = await get_or_404(request, NewsArticle, id, NOT_FOUND)

    if image is not None:
        article.image_url, article.media_id = await replace_media(request, article, image, IMAGE)

    if date:
        article.date = date
    if time:
        article.time = time
    if description:
        article.description = parse_description(description)
    if tag:
        article.tag = tag
    article.updated_at = func.now()
    article.updated_by = "admin"

    await db.commit()
    await db.refresh(article)

    await log.log_info("news", "Статья обновлена", {"id": id})
    return article


async def news_stats_service(request: Request) -> dict:
    """Сводка по статьям + топ-5 по просмотрам."""
    db = request.state.db

    stats = await db.execute(select(*view_stats_columns(NewsArticle, "articles", "article")).select_from(NewsArticle))
    top = await db.execute(
        select(NewsArticle.id, NewsArticle.tag, NewsArticle.views, NewsArticle.date)
        .order_by(NewsArticle.views.desc(), NewsArticle.id.asc())
        .limit(5)
    )
    return {
        "stats": plain_numbers(dict(stats.mappings().one())),
        "top_articles": [TopArticle.model_validate(dict(row)).model_dump() for row in top.mappings().all()],
    }
