# payana/services/media.py

import io
from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from payana.config import Settings
from payana.utils.errors import UpstreamError
from payana.utils.log import Log

IMAGE = "image"
VIDEO = "video"


@dataclass
class MediaAsset:
    url: str
    media_id: str


@dataclass
class DeleteResult:
    ok: bool
    error: Optional[str] = None


class MediaGateway:
    """
    Работа с медиа-хостингом (Cloudinary).
    Картинки (новости, реклама) и видео (отзывы) лежат в разных папках.
    SDK синхронный, поэтому вызовы уходят в пул потоков.
    """

    def __init__(self, settings: Settings, log: Log):
        self.log = log
        self.image_folder = settings.MEDIA_IMAGE_FOLDER
        self.video_folder = settings.MEDIA_VIDEO_FOLDER
        self.credentials = {
            "cloud_name": settings.CLOUDINARY_CLOUD_NAME,
            "api_key": settings.CLOUDINARY_API_KEY,
            "api_secret": settings.CLOUDINARY_API_SECRET,
        }
        cloudinary.config(secure=True, **self.credentials)

    def image_options(self) -> dict:
        return {
            "folder": self.image_folder,
            "resource_type": "auto",
            "transformation": [
                {"width": 1200, "height": 800, "crop": "limit"},
                {"quality": "auto:good"},
            ],
        }

    def video_options(self) -> dict:
        return {
            "folder": self.video_folder,
            "resource_type": "video",
            "eager": [
                {"width": 1280, "height": 720, "crop": "limit", "format": "mp4"},
            ],
            "eager_async": False,
            "transformation": [
                {"quality": "auto:good"},
            ],
        }

    async def _upload(self, data: bytes, options: dict) -> MediaAsset:
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload, io.BytesIO(data), **options, **self.credentials
            )
        except Exception as e:
            await self.log.log_error("media", f"Ошибка загрузки в Cloudinary: {e}", {"folder": options["folder"]})
            raise UpstreamError(str(e))

        await self.log.log_info("media", "Файл загружен", {"url": result["secure_url"]})
        return MediaAsset(url=result["secure_url"], media_id=result["public_id"])

    async def upload_image(self, data: bytes) -> MediaAsset:
        return await self._upload(data, self.image_options())

    async def upload_video(self, data: bytes) -> MediaAsset:
        return await self._upload(data, self.video_options())

    async def delete(self, media_id: Optional[str], kind: str = IMAGE) -> DeleteResult:
        """
        Удаление по public_id «по возможности»: ошибка пишется в лог
        и возвращается в DeleteResult, но никогда не пробрасывается.
        """
        if not media_id:
            return DeleteResult(ok=True)

        try:
            await run_in_threadpool(
                cloudinary.uploader.destroy, media_id, resource_type=kind, **self.credentials
            )
        except Exception as e:
            await self.log.log_warning("media", f"Не удалось удалить файл: {e}", {"media_id": media_id})
            return DeleteResult(ok=False, error=str(e))

        await self.log.log_info("media", "Файл удалён", {"media_id": media_id, "kind": kind})
        return DeleteResult(ok=True)
