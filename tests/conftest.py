# tests/conftest.py

import os
import tempfile

# окружение до импорта payana.config
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(), "boot.db"))
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.mkdtemp(), "log"))
os.environ["LOG_PRINT"] = "0"
os.environ["EMAIL_RECEIVERS"] = "sales@payana.test, admissions@payana.test"

import pytest
from fastapi.testclient import TestClient

from payana.config import settings
from payana.main import app
from payana.services.media import DeleteResult, MediaAsset
from payana.utils.errors import UpstreamError


class FakeMedia:
    """Вместо Cloudinary: запоминает загрузки и удаления."""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_upload = False
        self.fail_delete = False

    async def _upload(self, kind: str, data: bytes) -> MediaAsset:
        if self.fail_upload:
            raise UpstreamError("Upload failed: cloud unavailable")
        self.uploads.append((kind, data))
        n = len(self.uploads)
        return MediaAsset(url=f"https://cdn.test/{kind}/{n}", media_id=f"{kind}-{n}")

    async def upload_image(self, data: bytes) -> MediaAsset:
        return await self._upload("image", data)

    async def upload_video(self, data: bytes) -> MediaAsset:
        return await self._upload("video", data)

    async def delete(self, media_id, kind="image") -> DeleteResult:
        if not media_id:
            return DeleteResult(ok=True)
        self.deleted.append((media_id, kind))
        if self.fail_delete:
            return DeleteResult(ok=False, error="destroy failed")
        return DeleteResult(ok=True)


class FakeMailer:
    """Вместо SendGrid: журнал вызовов send()."""

    def __init__(self):
        self.sent = []

    def send(self, subject: str, html: str):
        self.sent.append((subject, html))

    async def drain(self):
        pass


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'payana.db'}")
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))

    with TestClient(app) as test_client:
        app.state.media = FakeMedia()
        app.state.mailer = FakeMailer()
        yield test_client


@pytest.fixture
def media(client) -> FakeMedia:
    return app.state.media


@pytest.fixture
def mailer(client) -> FakeMailer:
    return app.state.mailer


def png(name: str = "photo.png", data: bytes = b"\x89PNG fake image"):
    return {"image": (name, data, "image/png")}


def mp4(name: str = "clip.mp4", data: bytes = b"fake video bytes"):
    return {"video": (name, data, "video/mp4")}
