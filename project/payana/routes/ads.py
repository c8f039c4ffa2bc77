# payana/routes/ads.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from payana.models.ad import Ad as AdModel
from payana.schemas.content import ActiveAd, Ad
from payana.services.ads import (
    NOT_FOUND,
    ad_stats_service,
    create_ad_service,
    deactivate_all_ads_service,
    read_active_ad_service,
    read_ads_service,
    set_active_ad_service,
    update_ad_service,
)
from payana.services.content import delete_with_media_service
from payana.services.media import IMAGE
from payana.utils.errors import upstream_error
from payana.utils.uploads import UploadedFile, image_file

router = APIRouter()

# ────────────── READ ──────────────
@router.get(
    "/ads/active",
    summary="Текущая активная реклама",
    response_description="{id, image_url} или null, если активной рекламы нет",
)
async def read_active_ad(request: Request):
    try:
        ad = await read_active_ad_service(request)
    except Exception as e:
        raise await upstream_error(request, "ads", "получение активной рекламы", e)
    return {"success": True, "data": ActiveAd.model_validate(ad) if ad else None}


@router.get("/admin/ads", summary="Вся реклама для админки")
async def read_admin_ads(request: Request):
    try:
        ads = await read_ads_service(request)
    except Exception as e:
        raise await upstream_error(request, "ads", "получение рекламы (админка)", e)
    return {"success": True, "data": [Ad.model_validate(ad) for ad in ads]}


@router.get("/admin/ads/stats", summary="Статистика по рекламе")
async def read_ad_stats(request: Request):
    try:
        data = await ad_stats_service(request)
    except Exception as e:
        raise await upstream_error(request, "ads", "статистика", e)
    return {"success": True, "data": data}

# ────────────── CREATE / UPDATE / DELETE ──────────────
@router.post(
    "/ads",
    status_code=status.HTTP_200_OK,
    summary="Добавить рекламу (создаётся выключенной)",
    responses={
        200: {"description": "Реклама создана"},
        400: {"description": "Нет картинки"},
        500: {"description": "Ошибка базы данных или Cloudinary"},
    },
)
async def create_ad(request: Request, image: Optional[UploadedFile] = Depends(image_file)):
    try:
        ad = await create_ad_service(request, image)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "ads", "создание рекламы", e)
    return {"success": True, "message": "Ad created successfully", "data": Ad.model_validate(ad)}


@router.put("/ads/{id}", summary="Заменить картинку рекламы")
async def update_ad(id: int, request: Request, image: Optional[UploadedFile] = Depends(image_file)):
    try:
        ad = await update_ad_service(id, request, image)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "ads", f"обновление рекламы {id}", e)
    return {"success": True, "message": "Ad updated successfully", "data": Ad.model_validate(ad)}


@router.delete("/ads/{id}", summary="Удалить рекламу")
async def delete_ad(id: int, request: Request):
    try:
        await delete_with_media_service(request, AdModel, id, IMAGE, NOT_FOUND)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "ads", f"удаление рекламы {id}", e)
    return {"success": True, "message": "Ad deleted successfully"}

# ────────────── АКТИВАЦИЯ ──────────────
@router.patch(
    "/ads/deactivate-all",
    summary="Выключить всю рекламу",
)
async def deactivate_all_ads(request: Request):
    try:
        await deactivate_all_ads_service(request)
    except Exception as e:
        raise await upstream_error(request, "ads", "выключение рекламы", e)
    return {"success": True, "message": "All ads deactivated"}


@router.patch(
    "/ads/{id}/set-active",
    summary="Сделать рекламу активной",
    responses={
        200: {"description": "Реклама активна, остальные выключены"},
        404: {"description": "Реклама не найдена (остальные при этом уже выключены)"},
    },
)
async def set_active_ad(id: int, request: Request):
    try:
        ad = await set_active_ad_service(id, request)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "ads", f"активация рекламы {id}", e)
    return {"success": True, "message": "Ad activated successfully", "data": Ad.model_validate(ad)}
