# payana/utils/errors.py

"""
Ошибки API.

Все ошибки отдаются клиенту в едином виде:
{"success": false, "message": "...", "error": "..."}  (error — только если есть)
"""

from fastapi import HTTPException, status


class ApiError(HTTPException):
    def __init__(self, status_code: int, message: str, error: str | None = None):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.error = error


class ValidationError(ApiError):
    """Нет обязательного поля или файла."""

    def __init__(self, message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class NotFoundError(ApiError):
    def __init__(self, message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class UpstreamError(ApiError):
    """Ошибка базы или медиа-хостинга: текст ошибки отдаётся как есть."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message, error)


class NotificationError(Exception):
    """Ошибка отправки письма. Клиенту не отдаётся, только пишется в лог."""


def error_body(exc: HTTPException) -> dict:
    body = {"success": False, "message": getattr(exc, "message", exc.detail)}
    error = getattr(exc, "error", None)
    if error is not None:
        body["error"] = error
    return body


async def upstream_error(request, target: str, action: str, e: Exception, message: str | None = None) -> UpstreamError:
    """Логирует ошибку базы/хостинга и возвращает 500 с исходным текстом ошибки."""
    await request.app.state.log.log_error(target, f"Ошибка: {action}: {e}")
    if message is None:
        return UpstreamError(str(e))
    return UpstreamError(message, str(e))
