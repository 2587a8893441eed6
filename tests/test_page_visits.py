import threading
import time
from datetime import datetime, timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient

from middleware import IGNORED_PREFIXES, PageVisitMiddleware, record_visit
from models.analytics import PageVisit
from routers.stats import visit_stats


def _probe_app(recorder):
    app = FastAPI()
    app.add_middleware(PageVisitMiddleware, ignored_prefixes=IGNORED_PREFIXES, recorder=recorder)

    @app.get("/{path:path}")
    def anything(path: str):
        return {"path": path}

    @app.post("/{path:path}")
    def post_anything(path: str):
        return {"path": path}

    return app


def test_public_get_is_recorded_with_client_details():
    calls = []
    done = threading.Event()

    def recorder(path, ip, ua):
        calls.append((path, ip, ua))
        done.set()

    with TestClient(_probe_app(recorder)) as c:
        r = c.get("/courses", headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1", "User-Agent": "pytest-agent"})
        assert r.status_code == 200
        assert done.wait(2)

    assert calls == [("/courses", "203.0.113.9", "pytest-agent")]


def test_excluded_paths_and_non_get_are_not_recorded():
    calls = []
    done = threading.Event()

    def recorder(path, ip, ua):
        calls.append(path)
        if path == "/about":
            done.set()

    with TestClient(_probe_app(recorder)) as c:
        for path in ("/admin/courses", "/auth/x", "/favicon.ico", "/assets/a.js", "/uploads/a.png", "/static/site.css"):
            assert c.get(path).status_code == 200
        c.post("/contact")
        c.get("/about")
        assert done.wait(2)

    assert calls == ["/about"]


def test_recorder_failure_never_fails_request():
    attempted = threading.Event()

    def recorder(path, ip, ua):
        attempted.set()
        raise RuntimeError("storage down")

    with TestClient(_probe_app(recorder)) as c:
        r = c.get("/")
        assert r.status_code == 200
        assert r.json() == {"path": ""}
        assert attempted.wait(2)


def test_record_visit_writes_row(db):
    record_visit("/", "127.0.0.1", "unknown")
    visit = db.query(PageVisit).one()
    assert visit.path == "/"
    assert visit.ip_address == "127.0.0.1"
    assert visit.timestamp is not None


def test_app_logs_public_pages_only(client, db):
    client.get("/healthz")
    client.get("/control-panel/login")
    client.get("/public/videos")

    deadline = time.time() + 2
    while time.time() < deadline and db.query(PageVisit).count() == 0:
        time.sleep(0.02)

    time.sleep(0.1)
    assert [v.path for v in db.query(PageVisit).all()] == ["/public/videos"]


# ---------- dashboard analytics ----------

def test_visit_stats(db):
    now = datetime(2026, 3, 10, 15, 0, 0)
    rows = [
        ("/", now - timedelta(hours=1)),
        ("/", now - timedelta(hours=2)),
        ("/courses", now - timedelta(days=1)),
        ("/", now - timedelta(days=3)),
        ("/old", now - timedelta(days=30)),
    ]
    db.add_all([PageVisit(path=p, ip_address="1.1.1.1", user_agent="ua", timestamp=ts) for p, ts in rows])
    db.commit()

    stats = visit_stats(db, now=now)
    assert stats["total"] == 5
    assert stats["today"] == 2
    assert len(stats["daily"]) == 7
    assert stats["daily"][-1] == {"date": "2026-03-10", "visits": 2}
    assert stats["daily"][-2] == {"date": "2026-03-09", "visits": 1}
    assert stats["daily"][0]["date"] == "2026-03-04"
    assert stats["topPaths"][0] == {"path": "/", "visits": 3}
    assert {"path": "/old", "visits": 1} in stats["topPaths"]


def test_admin_stats_endpoint(admin_client):
    admin_client.post("/admin/courses", json={"title": "JEE", "description": "Prep"})
    r = admin_client.get("/admin/stats")
    assert r.status_code == 200
    stats = r.json()["stats"]
    assert stats["courses"] == 1
    assert stats["activeCourses"] == 1
    assert stats["batches"] == 0
    assert set(stats["visits"]) == {"total", "today", "daily", "topPaths"}
