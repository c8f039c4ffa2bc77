# payana/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str
    DATABASE_SSL: bool = True        # TLS без проверки сертификата сервера (Neon)

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    MEDIA_IMAGE_FOLDER: str = "payana_news"
    MEDIA_VIDEO_FOLDER: str = "payana_testimonials"
    MAX_IMAGE_BYTES: int = 10 * 1024 * 1024
    MAX_VIDEO_BYTES: int = 100 * 1024 * 1024

    SENDGRID_API_KEY: str = ""
    EMAIL_FROM: str = ""
    EMAIL_FROM_NAME: str = "Payana Overseas"
    EMAIL_RECEIVERS: str = ""        # список через запятую
    NOTIFY_TIMEZONE: str = "Asia/Kolkata"

    CORS_ORIGINS: str = "*"

    LOG_DIR: str = "payana/log"
    LOG_PRINT: str = "1"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
