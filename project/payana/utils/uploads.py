# payana/utils/uploads.py

"""
Приём файлов из multipart-формы.

Файл целиком читается в память (дальше он уходит в Cloudinary как буфер).
Тип файла берётся из Content-Type клиента и не сверяется с содержимым.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import File, Request, UploadFile

from payana.utils.errors import ValidationError


@dataclass
class UploadedFile:
    filename: str
    content_type: str
    data: bytes


async def read_upload(
    upload: Optional[UploadFile], type_prefix: str, max_bytes: int, type_message: str
) -> Optional[UploadedFile]:
    if upload is None or not upload.filename:
        return None

    content_type = upload.content_type or ""
    if not content_type.startswith(type_prefix):
        raise ValidationError(type_message)

    data = await upload.read(max_bytes + 1)
    await upload.close()
    if len(data) > max_bytes:
        raise ValidationError(f"File too large (limit {max_bytes // (1024 * 1024)} MB)")

    return UploadedFile(filename=upload.filename, content_type=content_type, data=data)


async def image_file(request: Request, image: Optional[UploadFile] = File(None)) -> Optional[UploadedFile]:
    """Необязательное поле `image` (новости, реклама), до 10 МБ."""
    limit = request.app.state.settings.MAX_IMAGE_BYTES
    return await read_upload(image, "image/", limit, "Only image files are allowed!")


async def video_file(request: Request, video: Optional[UploadFile] = File(None)) -> Optional[UploadedFile]:
    """Необязательное поле `video` (отзывы), до 100 МБ."""
    limit = request.app.state.settings.MAX_VIDEO_BYTES
    return await read_upload(video, "video/", limit, "Only video files are allowed!")
