# payana/services/ads.py

from typing import Optional

from fastapi import Request
from sqlalchemy import func, update
from sqlalchemy.future import select

from payana.models.ad import Ad
from payana.services.content import get_or_404, replace_media
from payana.services.media import IMAGE
from payana.utils.errors import NotFoundError, ValidationError
from payana.utils.uploads import UploadedFile

NOT_FOUND = "Ad not found"


async def read_active_ad_service(request: Request) -> Optional[Ad]:
    db = request.state.db
    result = await db.execute(select(Ad).where(Ad.is_active.is_(True)).order_by(Ad.id).limit(1))
    return result.scalar_one_or_none()


async def read_ads_service(request: Request) -> list[Ad]:
    db = request.state.db
    result = await db.execute(select(Ad).order_by(Ad.created_at.desc(), Ad.id.desc()))
    return result.scalars().all()


async def create_ad_service(request: Request, image: Optional[UploadedFile]) -> Ad:
    """Новая реклама создаётся неактивной."""
    db = request.state.db

    if image is None:
        raise ValidationError("Image is required")

    asset = await request.app.state.media.upload_image(image.data)

    ad = Ad(image_url=asset.url, media_id=asset.media_id, is_active=False)
    db.add(ad)
    await db.commit()
    await db.refresh(ad)

    await request.app.state.log.log_info("ads", "Реклама создана", {"id": ad.id})
    return ad


async def update_ad_service(id: int, request: Request, image: Optional[UploadedFile]) -> Ad:
    db = request.state.db

    ad = await get_or_404(request, Ad, id, NOT_FOUND)

    if image is not None:
        ad.image_url, ad.media_id = await replace_media(request, ad, image, IMAGE)
    ad.updated_at = func.now()
    ad.updated_by = "admin"

    await db.commit()
    await db.refresh(ad)

    await request.app.state.log.log_info("ads", "Реклама обновлена", {"id": id})
    return ad


async def set_active_ad_service(id: int, request: Request) -> Ad:
    """
    Делает активной ровно одну рекламу: сначала гасим все, потом включаем нужную,
    в одной транзакции. Если id не найден, все объявления всё равно
    остаются выключенными, а клиент получает 404.
    """
    db = request.state.db

    async with db.begin():
        await db.execute(update(Ad).values(is_active=False).execution_options(synchronize_session=False))
        ad = await db.get(Ad, id)
        if ad is not None:
            ad.is_active = True

    if ad is None:
        await request.app.state.log.log_warning("ads", "Реклама не найдена, все объявления выключены", {"id": id})
        raise NotFoundError(NOT_FOUND)

    await request.app.state.log.log_info("ads", "Реклама активирована", {"id": id})
    return ad


async def deactivate_all_ads_service(request: Request) -> None:
    db = request.state.db
    await db.execute(update(Ad).values(is_active=False).execution_options(synchronize_session=False))
    await db.commit()
    await request.app.state.log.log_info("ads", "Вся реклама выключена")


async def ad_stats_service(request: Request) -> dict:
    db = request.state.db
    result = await db.execute(
        select(
            func.count().label("total_ads"),
            func.count().filter(Ad.is_active).label("active_ads"),
        ).select_from(Ad)
    )
    return {key: int(value) for key, value in result.mappings().one().items()}
