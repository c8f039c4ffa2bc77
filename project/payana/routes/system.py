# payana/routes/system.py

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from payana.utils.database import ping

router = APIRouter()


@router.get("/health", tags=["system"], summary="Проверка, что сервис жив")
async def health_check():
    return {
        "success": True,
        "status": "OK",
        "message": "Payana Overseas API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/test-db", tags=["system"], summary="Проверка соединения с базой")
async def test_db(request: Request):
    try:
        current_time = await ping(request.app.state.engine)
    except Exception as e:
        await request.app.state.log.log_error("system", f"База недоступна: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Database connection failed", "error": str(e)},
        )
    return {
        "success": True,
        "message": "Database connection successful",
        "current_time": current_time,
    }
