import os

from config import get_settings
from models.assets import Asset

settings = get_settings()


def _asset_payload(**overrides):
    payload = {"title": "Topper 2026", "type": "RESULT", "url": "/uploads/topper.png"}
    payload.update(overrides)
    return payload


def test_upload_stores_file_and_serves_it(admin_client):
    r = admin_client.post(
        "/admin/upload",
        files={"file": ("banner.png", b"\x89PNG fake image bytes", "image/png")},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["url"].startswith("/uploads/")
    assert body["url"].endswith(".png")
    assert body["size"] == len(b"\x89PNG fake image bytes")
    assert body["mimeType"] == "image/png"

    stored = os.path.join(settings.upload_dir, body["url"].rsplit("/", 1)[1])
    assert os.path.exists(stored)

    served = admin_client.get(body["url"])
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake image bytes"


def test_upload_requires_session(client):
    r = client.post("/admin/upload", files={"file": ("a.png", b"x", "image/png")})
    assert r.status_code == 401


def test_create_asset_records_uploader(admin_client, admin_user):
    r = admin_client.post("/admin/assets", json=_asset_payload(categoryGroup="ENTRANCE", rank="AIR 12"))
    assert r.status_code == 200
    asset = r.json()["asset"]
    assert asset["type"] == "RESULT"
    assert asset["fileUrl"] == "/uploads/topper.png"
    assert asset["mimeType"] == "image/png"
    assert asset["categoryGroup"] == "ENTRANCE"
    assert asset["rank"] == "AIR 12"


def test_create_asset_stores_admin_id(admin_client, admin_user, db):
    admin_client.post("/admin/assets", json=_asset_payload())
    assert db.query(Asset).one().admin_id == admin_user.id


def test_create_asset_requires_fields(admin_client, db):
    for missing in ("title", "type", "url"):
        payload = _asset_payload()
        del payload[missing]
        r = admin_client.post("/admin/assets", json=payload)
        assert r.status_code == 400
        assert r.json() == {"message": "Missing required fields"}
    assert db.query(Asset).count() == 0


def test_create_asset_rejects_unknown_type(admin_client, db):
    r = admin_client.post("/admin/assets", json=_asset_payload(type="SPONSOR"))
    assert r.status_code == 400
    assert db.query(Asset).count() == 0


def test_list_assets_newest_first(admin_client, db, clock):
    db.add_all([
        Asset(title="first", type="GALLERY", file_url="/a.png", created_at=clock(0)),
        Asset(title="second", type="GALLERY", file_url="/b.png", created_at=clock(5)),
    ])
    db.commit()

    titles = [a["title"] for a in admin_client.get("/admin/assets").json()["assets"]]
    assert titles == ["second", "first"]


def test_update_asset_is_partial(admin_client):
    asset = admin_client.post("/admin/assets", json=_asset_payload(subCategory="JEE")).json()["asset"]

    r = admin_client.put(f"/admin/assets/{asset['id']}", json={"rank": "AIR 3"})
    assert r.status_code == 200
    updated = r.json()["asset"]
    assert updated["rank"] == "AIR 3"
    assert updated["title"] == "Topper 2026"
    assert updated["subCategory"] == "JEE"


def test_delete_asset(admin_client, db):
    asset = admin_client.post("/admin/assets", json=_asset_payload()).json()["asset"]

    assert admin_client.delete(f"/admin/assets/{asset['id']}").json() == {"success": True}
    assert db.query(Asset).count() == 0

    r = admin_client.delete(f"/admin/assets/{asset['id']}")
    assert r.status_code == 404
    assert r.json() == {"message": "Asset not found"}


def test_update_asset_clears_result_fields_with_null(admin_client):
    asset = admin_client.post("/admin/assets", json=_asset_payload(categoryGroup="BOARDS", rank="1")).json()["asset"]

    r = admin_client.put(f"/admin/assets/{asset['id']}", json={"rank": None, "categoryGroup": None, "title": None})
    updated = r.json()["asset"]
    assert updated["rank"] is None
    assert updated["categoryGroup"] is None
    assert updated["title"] == "Topper 2026"
