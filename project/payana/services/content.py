# payana/services/content.py

"""
Общие операции для контента с медиафайлом: новости, отзывы, реклама.
"""

import json

from fastapi import Request
from sqlalchemy import update, not_, func
from sqlalchemy.future import select

from payana.services.media import VIDEO
from payana.utils.errors import NotFoundError


def parse_description(value) -> list[str]:
    """
    Текст статьи -> список абзацев.
    Принимается JSON-массив строк либо обычный текст: тогда каждая
    непустая строка становится абзацем.

    "a\\nb\\n\\nc" -> ["a", "b", "c"]
    """
    if isinstance(value, list):
        return [str(item) for item in value]
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        parsed = None
    if isinstance(parsed, list):
        return [str(item) for item in parsed]
    return [line for line in str(value).splitlines() if line.strip()]


async def get_or_404(request: Request, model, id: int, message: str):
    db = request.state.db
    result = await db.execute(select(model).where(model.id == id))
    row = result.scalar_one_or_none()
    if row is None:
        await request.app.state.log.log_error(model.__tablename__, message, {"id": id})
        raise NotFoundError(message)
    return row


async def toggle_active_service(request: Request, model, id: int, message: str) -> bool:
    """is_active = NOT is_active одним запросом; возвращает новое значение."""
    db = request.state.db
    result = await db.execute(
        update(model)
        .where(model.id == id)
        .values(is_active=not_(model.is_active))
        .returning(model.is_active)
        .execution_options(synchronize_session=False)
    )
    is_active = result.scalar_one_or_none()
    if is_active is None:
        await db.rollback()
        raise NotFoundError(message)

    await db.commit()
    await request.app.state.log.log_info(model.__tablename__, "Статус изменён", {"id": id, "is_active": is_active})
    return is_active


async def increment_views_service(request: Request, model, id: int) -> None:
    """views = views + 1. Несуществующий id ошибкой не считается."""
    db = request.state.db
    await db.execute(
        update(model)
        .where(model.id == id)
        .values(views=model.views + 1)
        .execution_options(synchronize_session=False)
    )
    await db.commit()


async def delete_with_media_service(request: Request, model, id: int, kind: str, message: str) -> None:
    """
    Сначала «по возможности» удаляем файл в Cloudinary, потом строку.
    Ошибка удаления файла удалению строки не мешает.
    """
    db = request.state.db
    log = request.app.state.log

    row = await get_or_404(request, model, id, message)

    deleted = await request.app.state.media.delete(row.media_id, kind)
    if not deleted.ok:
        await log.log_warning(model.__tablename__, "Файл не удалён, удаляем запись", {"id": id, "error": deleted.error})

    await db.delete(row)
    await db.commit()
    await log.log_info(model.__tablename__, "Запись удалена", {"id": id})


async def replace_media(request: Request, row, upload, kind: str) -> tuple[str, str]:
    """
    Загружает новый файл и только после успешной загрузки
    удаляет старый. Возвращает (url, media_id) нового файла.
    """
    media = request.app.state.media
    if kind == VIDEO:
        asset = await media.upload_video(upload.data)
    else:
        asset = await media.upload_image(upload.data)

    deleted = await media.delete(row.media_id, kind)
    if not deleted.ok:
        await request.app.state.log.log_warning(
            row.__tablename__, "Старый файл не удалён", {"id": row.id, "error": deleted.error}
        )
    return asset.url, asset.media_id


def view_stats_columns(model, suffix: str, per: str) -> list:
    """Колонки сводки: всего / активных / неактивных / просмотров / среднее."""
    return [
        func.count().label(f"total_{suffix}"),
        func.count().filter(model.is_active).label(f"active_{suffix}"),
        func.count().filter(not_(model.is_active)).label(f"inactive_{suffix}"),
        func.coalesce(func.sum(model.views), 0).label("total_views"),
        func.coalesce(func.avg(model.views), 0).label(f"avg_views_per_{per}"),
    ]


def plain_numbers(row: dict) -> dict:
    """Decimal из AVG/SUM -> int/float для JSON."""
    return {key: float(value) if key.startswith("avg_") else int(value) for key, value in row.items()}
