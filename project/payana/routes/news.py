# payana/routes/news.py

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status

from payana.models.news import NewsArticle as NewsModel
from payana.schemas.content import NewsArticle
from payana.services.content import (
    delete_with_media_service,
    increment_views_service,
    toggle_active_service,
)
from payana.services.media import IMAGE
from payana.services.news import (
    NOT_FOUND,
    create_news_service,
    news_stats_service,
    read_news_service,
    read_public_news_service,
    update_news_service,
)
from payana.utils.errors import upstream_error
from payana.utils.uploads import UploadedFile, image_file

router = APIRouter()

# ────────────── READ (сайт) ──────────────
@router.get(
    "/news",
    status_code=status.HTTP_200_OK,
    summary="Активные новости для сайта",
    response_description="Только активные статьи, без служебных полей",
)
async def read_public_news(request: Request):
    try:
        articles = await read_public_news_service(request)
    except Exception as e:
        raise await upstream_error(request, "news", "получение новостей", e)
    return {"success": True, "data": articles}

# ────────────── READ (админка) ──────────────
@router.get(
    "/admin/news",
    status_code=status.HTTP_200_OK,
    summary="Все новости для админки",
)
async def read_admin_news(request: Request):
    try:
        articles = await read_news_service(request)
    except Exception as e:
        raise await upstream_error(request, "news", "получение новостей (админка)", e)
    return {"success": True, "data": [NewsArticle.model_validate(a) for a in articles]}


@router.get(
    "/admin/news/stats",
    status_code=status.HTTP_200_OK,
    summary="Статистика по новостям",
    response_description="Количество статей, просмотры и топ-5 по просмотрам",
)
async def read_news_stats(request: Request):
    try:
        data = await news_stats_service(request)
    except Exception as e:
        raise await upstream_error(request, "news", "статистика", e)
    return {"success": True, "data": data}

# ────────────── CREATE ──────────────
@router.post(
    "/news",
    status_code=status.HTTP_200_OK,
    summary="Создать статью",
    responses={
        200: {"description": "Статья создана"},
        400: {"description": "Нет картинки или обязательных полей"},
        500: {"description": "Ошибка базы данных или Cloudinary"},
    },
)
async def create_news(
    request: Request,
    image: Optional[UploadedFile] = Depends(image_file),
    date: Optional[str] = Form(None),
    time: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tag: Optional[str] = Form(None),
):
    try:
        article = await create_news_service(request, image, date, time, description, tag)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "news", "создание статьи", e)

    return {
        "success": True,
        "message": "Article created successfully",
        "data": NewsArticle.model_validate(article),
    }

# ────────────── UPDATE ──────────────
@router.put(
    "/news/{id}",
    status_code=status.HTTP_200_OK,
    summary="Обновить статью",
    responses={
        200: {"description": "Статья обновлена"},
        404: {"description": "Статья не найдена"},
        500: {"description": "Ошибка базы данных или Cloudinary"},
    },
)
async def update_news(
    id: int,
    request: Request,
    image: Optional[UploadedFile] = Depends(image_file),
    date: Optional[str] = Form(None),
    time: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tag: Optional[str] = Form(None),
):
    try:
        article = await update_news_service(id, request, image, date, time, description, tag)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "news", f"обновление статьи {id}", e)

    return {
        "success": True,
        "message": "Article updated successfully",
        "data": NewsArticle.model_validate(article),
    }

# ────────────── DELETE ──────────────
@router.delete(
    "/news/{id}",
    status_code=status.HTTP_200_OK,
    summary="Удалить статью",
    responses={
        200: {"description": "Статья удалена"},
        404: {"description": "Статья не найдена"},
    },
)
async def delete_news(id: int, request: Request):
    try:
        await delete_with_media_service(request, NewsModel, id, IMAGE, NOT_FOUND)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "news", f"удаление статьи {id}", e)
    return {"success": True, "message": "Article deleted successfully"}

# ────────────── TOGGLE / VIEW ──────────────
@router.patch(
    "/news/{id}/toggle",
    status_code=status.HTTP_200_OK,
    summary="Включить / выключить статью",
)
async def toggle_news(id: int, request: Request):
    try:
        is_active = await toggle_active_service(request, NewsModel, id, NOT_FOUND)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "news", f"переключение статьи {id}", e)

    return {
        "success": True,
        "message": f"Article {'activated' if is_active else 'deactivated'}",
        "data": {"is_active": is_active},
    }


@router.post(
    "/news/{id}/view",
    status_code=status.HTTP_200_OK,
    summary="Засчитать просмотр статьи",
)
async def view_news(id: int, request: Request):
    try:
        await increment_views_service(request, NewsModel, id)
    except Exception as e:
        raise await upstream_error(request, "news", f"просмотр статьи {id}", e)
    return {"success": True, "message": "View counted"}
