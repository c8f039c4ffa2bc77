# payana/main.py

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

# --- загрузка переменных окружения (до чтения Settings) ---
load_dotenv()

from payana.config import settings
from payana.utils.log import Log
from payana.utils.database import create_engine, create_sessionmaker, init_db
from payana.utils.errors import error_body
from payana.services.media import MediaGateway
from payana.services.mail import Mailer
from payana.middleware.db_middleware import DBSessionMiddleware

# --- sync логгер для раннего старта ---
boot_log = Log(settings.LOG_DIR, settings.LOG_PRINT)

# ────────────── Lifespan ──────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

    app.state.settings = settings
    app.state.engine = create_engine(settings.DATABASE_URL, settings.DATABASE_SSL)
    app.state.sessionmaker = create_sessionmaker(app.state.engine)

    # Таблицы: ошибка не фатальна, сервис продолжает принимать запросы
    try:
        await init_db(app.state.engine)
        boot_log.log_info_sync(target="startup", message="Таблицы готовы")
    except Exception as e:
        boot_log.log_error_sync(target="startup", message=f"Не удалось создать таблицы: {e}")

    app.state.log = Log(settings.LOG_DIR, settings.LOG_PRINT)
    app.state.media = MediaGateway(settings, app.state.log)
    app.state.mailer = Mailer(settings, app.state.log)
    await app.state.log.log_info(target="startup", message="Сервисы инициализированы")

    yield

    # shutdown
    await app.state.log.log_info(target="shutdown", message="Остановка приложения")
    await app.state.mailer.drain()
    await app.state.engine.dispose()
    await app.state.log.shutdown()
    boot_log.log_info_sync(target="shutdown", message="Log корректно завершён")

# ────────────── Создаём FastAPI приложение ──────────────
app = FastAPI(title="Payana Overseas API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# DB middleware для request.state.db
app.add_middleware(DBSessionMiddleware)

# ────────────── Ошибки в едином формате {success, message} ──────────────
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"] if p != "body") or "body" for err in exc.errors())
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": f"Invalid request: {fields}"},
    )

# ────────────── Подключение роутов ──────────────
from payana.routes import leads, news, testimonials, ads, system

app.include_router(leads.router, tags=["leads"])
app.include_router(news.router, tags=["news"])
app.include_router(testimonials.router, tags=["testimonials"])
app.include_router(ads.router, tags=["ads"])
app.include_router(system.router)

# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    boot_log.log_info_sync(target="startup", message="Запуск uvicorn.run")
    uvicorn.run(
        "payana.main:app",
        host="0.0.0.0",
        port=5000,
        log_level="info",
    )
