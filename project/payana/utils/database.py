# payana/utils/database.py

import ssl
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base

# ────────────── Base для моделей ──────────────
Base = declarative_base()  # базовый класс для всех моделей SQLAlchemy


def normalize_database_url(url: str) -> str:
    """
    Приводит URL к асинхронному драйверу.
    Neon/Heroku отдают postgres://... или postgresql://...?sslmode=require,
    а asyncpg не понимает параметр sslmode — TLS включаем через connect_args.
    """
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    parsed = make_url(url)
    if parsed.drivername.startswith("postgresql") and "sslmode" in parsed.query:
        parsed = parsed.difference_update_query(["sslmode"])
    return parsed.render_as_string(hide_password=False)


def insecure_ssl_context() -> ssl.SSLContext:
    """TLS обязателен, но сертификат сервера не проверяется."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


# ────────────── Асинхронный движок ──────────────
def create_engine(database_url: str, use_ssl: bool = True) -> AsyncEngine:
    url = normalize_database_url(database_url)
    connect_args = {}
    engine_kwargs = {"echo": False}

    if url.startswith("postgresql"):
        if use_ssl:
            connect_args["ssl"] = insecure_ssl_context()
        engine_kwargs["pool_pre_ping"] = True

    return create_async_engine(url, connect_args=connect_args, **engine_kwargs)


# ────────────── Асинхронная сессия ──────────────
def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# ────────────── Инициализация базы данных ──────────────
async def init_db(engine: AsyncEngine):
    """
    Создаёт все таблицы (если ещё не созданы):
    study, work_profiles, invest, news_articles, testimonials, ads
    """
    from payana.models import ad, lead, news, testimonial  # noqa: F401  регистрация моделей

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(engine: AsyncEngine):
    """Проверка соединения: возвращает текущее время сервера БД."""
    async with engine.connect() as conn:
        result = await conn.execute(text("SELECT CURRENT_TIMESTAMP AS current_time"))
        return result.scalar_one()
