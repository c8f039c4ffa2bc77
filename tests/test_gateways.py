# tests/test_gateways.py

import asyncio
from datetime import datetime, timezone

import cloudinary.uploader
import pytest

from payana.config import Settings
from payana.services.content import parse_description
from payana.services.mail import Mailer, parse_recipients
from payana.services.media import MediaGateway
from payana.services.templates import format_table, render_lead_email
from payana.utils.database import normalize_database_url
from payana.utils.errors import NotificationError, UpstreamError
from payana.utils.log import Log
from payana.schemas.lead import InvestLeadCreate


def make_settings(**overrides) -> Settings:
    values = {"DATABASE_URL": "sqlite+aiosqlite://", "EMAIL_RECEIVERS": "a@x.com"}
    values.update(overrides)
    return Settings(**values)


# ────────────── описание статьи ──────────────

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\nb\n\nc", ["a", "b", "c"]),
        ("line one\r\nline two", ["line one", "line two"]),
        ('["x", "y"]', ["x", "y"]),
        ("2024", ["2024"]),
        ('{"not": "a list"}', ['{"not": "a list"}']),
        ("  \n\n  ", []),
    ],
)
def test_parse_description(raw, expected):
    assert parse_description(raw) == expected

# ────────────── письма ──────────────

def test_format_table_renders_empty_values_as_na():
    html = format_table([("Full Name", "Asha"), ("Phone Number", "")])
    assert "<th" in html and "Asha" in html
    assert "N/A" in html


def test_format_table_escapes_values():
    html = format_table([("Full Name", "<script>x</script>")])
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_invest_email_uses_kolkata_time():
    lead = InvestLeadCreate(name="Asha", email="a@x.com", country=None)
    now = datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)

    subject, html = render_lead_email("invest", lead, "Asia/Kolkata", now)

    assert subject == "💰 New Investment Inquiry - Payana Overseas"
    assert "Not specified" in html
    assert "01/01/2025, 05:30:00 AM" in html


def test_parse_recipients_trims_and_drops_empty():
    assert parse_recipients(" a@x.com, b@y.com ,, ") == ["a@x.com", "b@y.com"]
    assert parse_recipients("") == []

# ────────────── URL базы ──────────────

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("postgres://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
        ("postgresql://u:p@host/db?sslmode=require", "postgresql+asyncpg://u:p@host/db"),
        ("sqlite+aiosqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
    ],
)
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected

# ────────────── Mailer ──────────────

def test_mailer_send_never_raises_to_caller(tmp_path):
    async def scenario():
        log = Log(str(tmp_path), "0")
        mailer = Mailer(make_settings(), log)

        async def broken(subject, html, recipients):
            raise NotificationError("transport down")

        mailer.dispatch = broken
        task = mailer.send("subject", "<p>hi</p>")
        await mailer.drain()
        await log.shutdown()
        return task

    task = asyncio.run(scenario())
    assert task.done()
    assert task.exception() is None


def test_mailer_passes_all_recipients_in_one_dispatch(tmp_path):
    calls = []

    async def scenario():
        log = Log(str(tmp_path), "0")
        mailer = Mailer(make_settings(EMAIL_RECEIVERS="a@x.com, b@y.com"), log)

        async def record(subject, html, recipients):
            calls.append((subject, recipients))
            return 202

        mailer.dispatch = record
        mailer.send("New lead", "<p/>")
        await mailer.drain()
        await log.shutdown()

    asyncio.run(scenario())
    assert calls == [("New lead", ["a@x.com", "b@y.com"])]


def test_mailer_dispatch_requires_configuration(tmp_path):
    mailer = Mailer(make_settings(SENDGRID_API_KEY=""), Log(str(tmp_path), "0"))
    with pytest.raises(NotificationError):
        asyncio.run(mailer.dispatch("s", "<p/>", ["a@x.com"]))

# ────────────── MediaGateway ──────────────

def run_with_log(tmp_path, make_coro):
    async def scenario():
        log = Log(str(tmp_path), "0")
        try:
            return await make_coro(log)
        finally:
            await log.shutdown()

    return asyncio.run(scenario())


def test_media_delete_failure_is_swallowed(tmp_path, monkeypatch):
    def destroy(public_id, **options):
        raise RuntimeError("cloud says no")

    monkeypatch.setattr(cloudinary.uploader, "destroy", destroy)

    result = run_with_log(tmp_path, lambda log: MediaGateway(make_settings(), log).delete("payana_news/abc", "image"))

    assert result.ok is False
    assert "cloud says no" in result.error


def test_media_delete_uses_resource_type(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(cloudinary.uploader, "destroy", lambda public_id, **o: calls.append((public_id, o["resource_type"])))

    result = run_with_log(tmp_path, lambda log: MediaGateway(make_settings(), log).delete("clip", "video"))

    assert result.ok is True
    assert calls == [("clip", "video")]


def test_video_upload_options(tmp_path, monkeypatch):
    seen = {}

    def upload(file, **options):
        seen.update(options)
        seen["data"] = file.read()
        return {"secure_url": "https://res.cloudinary.com/v.mp4", "public_id": "payana_testimonials/v"}

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)

    asset = run_with_log(tmp_path, lambda log: MediaGateway(make_settings(), log).upload_video(b"bytes"))

    assert asset.url == "https://res.cloudinary.com/v.mp4"
    assert asset.media_id == "payana_testimonials/v"
    assert seen["folder"] == "payana_testimonials"
    assert seen["resource_type"] == "video"
    assert seen["eager_async"] is False
    assert seen["eager"][0]["width"] == 1280
    assert seen["data"] == b"bytes"


def test_image_upload_failure_becomes_upstream_error(tmp_path, monkeypatch):
    def upload(file, **options):
        raise RuntimeError("Invalid image file")

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)

    with pytest.raises(UpstreamError) as exc:
        run_with_log(tmp_path, lambda log: MediaGateway(make_settings(), log).upload_image(b"x"))
    assert exc.value.message == "Invalid image file"
