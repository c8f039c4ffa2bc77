# tests/test_news.py

import json

from conftest import png


def create_article(client, **fields):
    data = {"date": "12 Oct 2025", "time": "10:30 AM", "description": "First\nSecond", "tag": "Visa"}
    data.update(fields)
    resp = client.post("/news", data=data, files=png())
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def test_create_without_image_is_rejected(client, media):
    resp = client.post("/news", data={"date": "d", "time": "t", "description": "x", "tag": "y"})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Image is required"}
    assert client.get("/admin/news").json()["data"] == []
    assert media.uploads == []


def test_create_with_missing_field_is_rejected(client, media):
    resp = client.post("/news", data={"date": "d", "time": "t", "description": "x"}, files=png())

    assert resp.status_code == 400
    assert resp.json()["message"] == "All fields are required"
    assert media.uploads == []


def test_newline_description_is_split_and_blank_lines_dropped(client):
    article = create_article(client, description="a\nb\n\nc")
    assert article["description"] == ["a", "b", "c"]


def test_json_array_description_is_kept(client):
    article = create_article(client, description=json.dumps(["one", "two\nlines"]))
    assert article["description"] == ["one", "two\nlines"]


def test_create_uploads_image_and_stores_media_id(client, media):
    article = create_article(client)

    assert media.uploads[0][0] == "image"
    assert article["image_url"] == "https://cdn.test/image/1"
    assert article["media_id"] == "image-1"
    assert article["views"] == 0
    assert article["is_active"] is True
    assert article["created_by"] == "admin"


def test_non_image_upload_is_rejected(client, media):
    resp = client.post(
        "/news",
        data={"date": "d", "time": "t", "description": "x", "tag": "y"},
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Only image files are allowed!"
    assert media.uploads == []


def test_oversized_image_is_rejected(client, media, monkeypatch):
    from payana.config import settings

    monkeypatch.setattr(settings, "MAX_IMAGE_BYTES", 8)
    resp = client.post(
        "/news",
        data={"date": "d", "time": "t", "description": "x", "tag": "y"},
        files=png(data=b"0123456789"),
    )
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("File too large")
    assert media.uploads == []


def test_upload_failure_is_500_with_message_and_no_row(client, media):
    media.fail_upload = True
    resp = client.post(
        "/news", data={"date": "d", "time": "t", "description": "x", "tag": "y"}, files=png()
    )

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Upload failed: cloud unavailable"}
    assert client.get("/admin/news").json()["data"] == []


def test_public_list_hides_inactive_and_internal_fields(client):
    visible = create_article(client, tag="Visible")
    hidden = create_article(client, tag="Hidden")
    client.patch(f"/news/{hidden['id']}/toggle")

    public = client.get("/news").json()["data"]
    assert [a["id"] for a in public] == [visible["id"]]
    assert set(public[0]) == {"id", "image", "date", "time", "description", "tag", "views"}
    assert public[0]["image"] == visible["image_url"]

    admin = client.get("/admin/news").json()["data"]
    assert {a["id"] for a in admin} == {visible["id"], hidden["id"]}
    assert all(a["is_active"] is False for a in admin if a["id"] == hidden["id"])


def test_toggle_twice_restores_original_value(client):
    article = create_article(client)

    first = client.patch(f"/news/{article['id']}/toggle").json()
    assert first == {"success": True, "message": "Article deactivated", "data": {"is_active": False}}

    second = client.patch(f"/news/{article['id']}/toggle").json()
    assert second["data"]["is_active"] is True
    assert second["message"] == "Article activated"


def test_toggle_unknown_article_is_404(client):
    resp = client.patch("/news/9999/toggle")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Article not found"


def test_view_counter_increments_without_dedup(client):
    article = create_article(client)
    for _ in range(3):
        assert client.post(f"/news/{article['id']}/view").json() == {"success": True, "message": "View counted"}

    assert client.get("/news").json()["data"][0]["views"] == 3


def test_update_keeps_unspecified_fields(client, media):
    article = create_article(client, tag="Visa", description="old text")

    resp = client.put(f"/news/{article['id']}", data={"tag": "Study"})

    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["tag"] == "Study"
    assert updated["description"] == ["old text"]
    assert updated["date"] == article["date"]
    assert updated["image_url"] == article["image_url"]
    assert updated["updated_by"] == "admin"
    assert media.deleted == []


def test_update_with_new_image_replaces_old_media(client, media):
    article = create_article(client)

    resp = client.put(f"/news/{article['id']}", files=png("new.png"))

    updated = resp.json()["data"]
    assert updated["media_id"] == "image-2"
    assert updated["image_url"] == "https://cdn.test/image/2"
    assert media.deleted == [("image-1", "image")]


def test_update_proceeds_when_old_media_delete_fails(client, media):
    article = create_article(client)
    media.fail_delete = True

    resp = client.put(f"/news/{article['id']}", files=png("new.png"))

    assert resp.status_code == 200
    assert resp.json()["data"]["media_id"] == "image-2"


def test_update_unknown_article_is_404(client, media):
    resp = client.put("/news/4242", data={"tag": "x"}, files=png())
    assert resp.status_code == 404
    assert resp.json()["message"] == "Article not found"
    assert media.uploads == []


def test_delete_removes_media_then_row(client, media):
    article = create_article(client)

    resp = client.delete(f"/news/{article['id']}")

    assert resp.json() == {"success": True, "message": "Article deleted successfully"}
    assert media.deleted == [("image-1", "image")]
    assert client.get("/admin/news").json()["data"] == []


def test_delete_succeeds_even_if_media_delete_fails(client, media):
    article = create_article(client)
    media.fail_delete = True

    assert client.delete(f"/news/{article['id']}").status_code == 200
    assert client.get("/admin/news").json()["data"] == []


def test_delete_unknown_article_is_404(client):
    assert client.delete("/news/77").status_code == 404


def test_stats_aggregate_and_top_five(client):
    ids = [create_article(client, tag=f"t{i}")["id"] for i in range(6)]
    for i, article_id in enumerate(ids):
        for _ in range(i):
            client.post(f"/news/{article_id}/view")
    client.patch(f"/news/{ids[0]}/toggle")

    data = client.get("/admin/news/stats").json()["data"]

    assert data["stats"] == {
        "total_articles": 6,
        "active_articles": 5,
        "inactive_articles": 1,
        "total_views": 15,
        "avg_views_per_article": 2.5,
    }
    assert [a["id"] for a in data["top_articles"]] == list(reversed(ids[1:]))
    assert set(data["top_articles"][0]) == {"id", "tag", "views", "date"}


def test_stats_on_empty_table(client):
    data = client.get("/admin/news/stats").json()["data"]
    assert data["stats"]["total_articles"] == 0
    assert data["stats"]["total_views"] == 0
    assert data["top_articles"] == []
