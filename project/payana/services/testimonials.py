# payana/services/testimonials.py

from typing import Optional

from fastapi import Request
from sqlalchemy import func, update
from sqlalchemy.future import select

from payana.models.testimonial import Testimonial
from payana.schemas.content import ReorderRequest, TopTestimonial
from payana.services.content import get_or_404, plain_numbers, replace_media, view_stats_columns
from payana.services.media import VIDEO
from payana.utils.errors import ValidationError
from payana.utils.uploads import UploadedFile

NOT_FOUND = "Testimonial not found"


def ordered(query):
    return query.order_by(Testimonial.display_order.asc(), Testimonial.created_at.desc(), Testimonial.id.desc())


async def read_public_testimonials_service(request: Request) -> list[Testimonial]:
    """Активные отзывы в порядке display_order."""
    db = request.state.db
    result = await db.execute(ordered(select(Testimonial).where(Testimonial.is_active.is_(True))))
    return result.scalars().all()


async def read_testimonials_service(request: Request) -> list[Testimonial]:
    db = request.state.db
    result = await db.execute(ordered(select(Testimonial)))
    testimonials = result.scalars().all()
    await request.app.state.log.log_info("testimonials", f"{len(testimonials)} отзывов загружено")
    return testimonials


async def create_testimonial_service(
    request: Request,
    video: Optional[UploadedFile],
    name: Optional[str],
    prefix: Optional[str],
) -> Testimonial:
    """
    Новый отзыв встаёт в конец списка: display_order = max + 1.
    Чтение максимума и вставка идут в одной транзакции.
    """
    db = request.state.db
    log = request.app.state.log

    if video is None:
        raise ValidationError("Video is required")
    if not name:
        raise ValidationError("Name is required")

    asset = await request.app.state.media.upload_video(video.data)

    async with db.begin():
        result = await db.execute(select(func.coalesce(func.max(Testimonial.display_order), 0)))
        next_order = int(result.scalar_one()) + 1

        testimonial = Testimonial(
            video_url=asset.url,
            media_id=asset.media_id,
            name=name,
            prefix=prefix or "None",
            display_order=next_order,
        )
        db.add(testimonial)

    await db.refresh(testimonial)
    await log.log_info("testimonials", "Отзыв создан", {"id": testimonial.id, "display_order": next_order})
    return testimonial


async def update_testimonial_service(
    id: int,
    request: Request,
    video: Optional[UploadedFile],
    name: Optional[str],
    prefix: Optional[str],
) -> Testimonial:
    db = request.state.db

    testimonial = await get_or_404(request, Testimonial, id, NOT_FOUND)

    if video is not None:
        testimonial.video_url, testimonial.media_id = await replace_media(request, testimonial, video, VIDEO)

    if name:
        testimonial.name = name
    if prefix:
        testimonial.prefix = prefix
    testimonial.updated_at = func.now()
    testimonial.updated_by = "admin"

    await db.commit()
    await db.refresh(testimonial)

    await request.app.state.log.log_info("testimonials", "Отзыв обновлён", {"id": id})
    return testimonial


async def reorder_testimonials_service(reorder: ReorderRequest, request: Request) -> None:
    """
    Записывает display_order для каждой пары {id, order}.
    Всё в одной транзакции: либо применяются все пары, либо ни одна.
    """
    db = request.state.db

    async with db.begin():
        for item in reorder.order:
            await db.execute(
                update(Testimonial)
                .where(Testimonial.id == item.id)
                .values(display_order=item.order, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )

    await request.app.state.log.log_info("testimonials", "Порядок отзывов обновлён", {"count": len(reorder.order)})


async def testimonial_stats_service(request: Request) -> dict:
    db = request.state.db

    stats = await db.execute(select(*view_stats_columns(Testimonial, "testimonials", "testimonial")).select_from(Testimonial))
    top = await db.execute(
        select(Testimonial.id, Testimonial.name, Testimonial.prefix, Testimonial.views)
        .order_by(Testimonial.views.desc(), Testimonial.id.asc())
        .limit(5)
    )
    return {
        "stats": plain_numbers(dict(stats.mappings().one())),
        "top_testimonials": [TopTestimonial.model_validate(dict(row)).model_dump() for row in top.mappings().all()],
    }
