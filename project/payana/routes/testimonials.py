# payana/routes/testimonials.py

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Form, HTTPException, Request, status
from pydantic import ValidationError as PydanticValidationError

from payana.models.testimonial import Testimonial as TestimonialModel
from payana.schemas.content import PublicTestimonial, ReorderRequest, Testimonial
from payana.services.content import (
    delete_with_media_service,
    increment_views_service,
    toggle_active_service,
)
from payana.services.media import VIDEO
from payana.services.testimonials import (
    NOT_FOUND,
    create_testimonial_service,
    read_public_testimonials_service,
    read_testimonials_service,
    reorder_testimonials_service,
    testimonial_stats_service,
    update_testimonial_service,
)
from payana.utils.errors import ValidationError, upstream_error
from payana.utils.uploads import UploadedFile, video_file

router = APIRouter()

# ────────────── READ ──────────────
@router.get("/testimonials", summary="Активные видео-отзывы для сайта")
async def read_public_testimonials(request: Request):
    try:
        testimonials = await read_public_testimonials_service(request)
    except Exception as e:
        raise await upstream_error(request, "testimonials", "получение отзывов", e)
    return {"success": True, "data": [PublicTestimonial.model_validate(t) for t in testimonials]}


@router.get("/admin/testimonials", summary="Все отзывы для админки")
async def read_admin_testimonials(request: Request):
    try:
        testimonials = await read_testimonials_service(request)
    except Exception as e:
        raise await upstream_error(request, "testimonials", "получение отзывов (админка)", e)
    return {"success": True, "data": [Testimonial.model_validate(t) for t in testimonials]}


@router.get("/admin/testimonials/stats", summary="Статистика по отзывам")
async def read_testimonial_stats(request: Request):
    try:
        data = await testimonial_stats_service(request)
    except Exception as e:
        raise await upstream_error(request, "testimonials", "статистика", e)
    return {"success": True, "data": data}

# ────────────── CREATE ──────────────
@router.post(
    "/testimonials",
    status_code=status.HTTP_200_OK,
    summary="Добавить видео-отзыв",
    responses={
        200: {"description": "Отзыв добавлен в конец списка"},
        400: {"description": "Нет видео или имени"},
        500: {"description": "Ошибка базы данных или Cloudinary"},
    },
)
async def create_testimonial(
    request: Request,
    video: Optional[UploadedFile] = Depends(video_file),
    name: Optional[str] = Form(None),
    prefix: Optional[str] = Form(None),
):
    try:
        testimonial = await create_testimonial_service(request, video, name, prefix)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "testimonials", "создание отзыва", e)

    return {
        "success": True,
        "message": "Testimonial created successfully",
        "data": Testimonial.model_validate(testimonial),
    }

# ────────────── REORDER ──────────────
# объявлен раньше PUT /testimonials/{id}, иначе "reorder" попадёт в {id}
@router.put(
    "/testimonials/reorder",
    status_code=status.HTTP_200_OK,
    summary="Изменить порядок отзывов",
    responses={
        200: {"description": "Порядок обновлён (все пары или ни одной)"},
        400: {"description": "Нет массива order"},
        500: {"description": "Ошибка базы данных"},
    },
)
async def reorder_testimonials(request: Request, body: Optional[Any] = Body(None)):
    if not isinstance(body, dict) or not isinstance(body.get("order"), list):
        raise ValidationError("Order array is required")
    try:
        reorder = ReorderRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid order item: {e.errors()[0]['msg']}")

    try:
        await reorder_testimonials_service(reorder, request)
    except Exception as e:
        raise await upstream_error(request, "testimonials", "изменение порядка", e, "Failed to update order")
    return {"success": True, "message": "Order updated successfully"}

# ────────────── UPDATE ──────────────
@router.put(
    "/testimonials/{id}",
    status_code=status.HTTP_200_OK,
    summary="Обновить отзыв",
    responses={
        200: {"description": "Отзыв обновлён"},
        404: {"description": "Отзыв не найден"},
    },
)
async def update_testimonial(
    id: int,
    request: Request,
    video: Optional[UploadedFile] = Depends(video_file),
    name: Optional[str] = Form(None),
    prefix: Optional[str] = Form(None),
):
    try:
        testimonial = await update_testimonial_service(id, request, video, name, prefix)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "testimonials", f"обновление отзыва {id}", e)

    return {
        "success": True,
        "message": "Testimonial updated successfully",
        "data": Testimonial.model_validate(testimonial),
    }

# ────────────── DELETE ──────────────
@router.delete("/testimonials/{id}", summary="Удалить отзыв")
async def delete_testimonial(id: int, request: Request):
    try:
        await delete_with_media_service(request, TestimonialModel, id, VIDEO, NOT_FOUND)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "testimonials", f"удаление отзыва {id}", e)
    return {"success": True, "message": "Testimonial deleted successfully"}

# ────────────── TOGGLE / VIEW ──────────────
@router.patch("/testimonials/{id}/toggle", summary="Включить / выключить отзыв")
async def toggle_testimonial(id: int, request: Request):
    try:
        is_active = await toggle_active_service(request, TestimonialModel, id, NOT_FOUND)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "testimonials", f"переключение отзыва {id}", e)

    return {
        "success": True,
        "message": f"Testimonial {'activated' if is_active else 'deactivated'}",
        "data": {"is_active": is_active},
    }


@router.post("/testimonials/{id}/view", summary="Засчитать просмотр отзыва")
async def view_testimonial(id: int, request: Request):
    try:
        await increment_views_service(request, TestimonialModel, id)
    except Exception as e:
        raise await upstream_error(request, "testimonials", f"просмотр отзыва {id}", e)
    return {"success": True, "message": "View counted"}
