# tests/test_ads.py

from conftest import png


def create_ad(client):
    resp = client.post("/ads", files=png())
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def active_ids(client):
    return [ad["id"] for ad in client.get("/admin/ads").json()["data"] if ad["is_active"]]


def test_create_requires_image(client):
    resp = client.post("/ads")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Image is required"


def test_new_ad_is_inactive(client):
    ad = create_ad(client)
    assert ad["is_active"] is False
    assert client.get("/ads/active").json() == {"success": True, "data": None}


def test_set_active_leaves_exactly_one_active(client):
    ads = [create_ad(client) for _ in range(3)]

    client.patch(f"/ads/{ads[0]['id']}/set-active")
    resp = client.patch(f"/ads/{ads[2]['id']}/set-active")

    assert resp.status_code == 200
    assert resp.json()["data"]["is_active"] is True
    assert active_ids(client) == [ads[2]["id"]]
    assert client.get("/ads/active").json()["data"] == {"id": ads[2]["id"], "image_url": ads[2]["image_url"]}


def test_set_active_unknown_id_deactivates_all_then_404(client):
    ad = create_ad(client)
    client.patch(f"/ads/{ad['id']}/set-active")

    resp = client.patch("/ads/9999/set-active")

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Ad not found"}
    assert active_ids(client) == []


def test_deactivate_all(client):
    ad = create_ad(client)
    client.patch(f"/ads/{ad['id']}/set-active")

    assert client.patch("/ads/deactivate-all").json() == {"success": True, "message": "All ads deactivated"}
    assert active_ids(client) == []


def test_update_replaces_image(client, media):
    ad = create_ad(client)

    resp = client.put(f"/ads/{ad['id']}", files=png("banner.png"))

    assert resp.json()["data"]["image_url"] == "https://cdn.test/image/2"
    assert resp.json()["data"]["updated_by"] == "admin"
    assert media.deleted == [("image-1", "image")]


def test_update_unknown_is_404(client):
    assert client.put("/ads/31337", files=png()).status_code == 404


def test_delete_and_stats(client, media):
    first = create_ad(client)
    second = create_ad(client)
    client.patch(f"/ads/{second['id']}/set-active")

    assert client.get("/admin/ads/stats").json()["data"] == {"total_ads": 2, "active_ads": 1}

    media.fail_delete = True
    assert client.delete(f"/ads/{first['id']}").status_code == 200
    assert client.get("/admin/ads/stats").json()["data"] == {"total_ads": 1, "active_ads": 1}
    assert client.delete(f"/ads/{first['id']}").status_code == 404
