from models.assets import Asset
from models.courses import Batch, Course
from models.faculty import Faculty
from models.notifications import Notification
from database import get_session_factory
from main import app
from routers.public import merge_posters, poster_to_notification, split_faculty


def _asset(kind, title, minute, clock, url=None):
    return Asset(title=title, type=kind, file_url=url or f"/uploads/{title}.png", created_at=clock(minute))


def _home(client):
    r = client.get("/public/home")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    return body["data"]


def test_home_shape_on_empty_store(client):
    data = _home(client)
    assert data == {
        "courses": [], "faculty": [], "leadership": [], "notifications": [],
        "banners": [], "gallery": [], "results": [],
    }


def test_home_excludes_inactive_courses(client, db, clock):
    active = Course(title="JEE", description="d", is_active=True, created_at=clock(0))
    db.add_all([active, Course(title="Closed", description="d", is_active=False, created_at=clock(1))])
    db.commit()
    db.add(Batch(name="Morning", course_id=active.id, start_date=clock(60)))
    db.commit()

    courses = _home(client)["courses"]
    assert [c["title"] for c in courses] == ["JEE"]
    assert courses[0]["_count"] == {"batches": 1}


def test_home_partitions_faculty_by_category(client, db, clock):
    db.add_all([
        Faculty(name="Teacher", designation="Physics", category="TEACHING", created_at=clock(0)),
        Faculty(name="Director", designation="Director", category="LEADERSHIP", created_at=clock(1)),
        Faculty(name="Advisor", designation="Board", category="ADVISOR", created_at=clock(2)),
    ])
    db.commit()

    data = _home(client)
    assert [m["name"] for m in data["faculty"]] == ["Teacher"]
    assert [m["name"] for m in data["leadership"]] == ["Director"]


def test_home_puts_posters_before_notifications(client, db, clock):
    db.add_all([
        _asset("POSTER", "older-poster", 0, clock),
        _asset("POSTER", "newer-poster", 1, clock),
        _asset("POSTER", "", 2, clock, url="/uploads/untitled.png"),
        Notification(message="old notice", created_at=clock(3)),
        Notification(message="new notice", created_at=clock(4)),
        Notification(message="hidden", is_active=False, created_at=clock(5)),
    ])
    db.commit()

    notifications = _home(client)["notifications"]
    assert [n["message"] for n in notifications] == [
        "Announcement", "newer-poster", "older-poster", "new notice", "old notice",
    ]
    assert [n["type"] for n in notifications[:3]] == ["POSTER"] * 3
    assert notifications[0]["link"] == "/uploads/untitled.png"
    assert all(n["isActive"] for n in notifications)


def test_home_limits_media_sections(client, db, clock):
    minute = 0
    for kind, count in (("BANNER", 7), ("GALLERY", 12), ("RESULT", 11), ("POSTER", 6)):
        for i in range(count):
            db.add(_asset(kind, f"{kind.lower()}-{i}", minute, clock))
            minute += 1
    db.commit()

    data = _home(client)
    assert len(data["banners"]) == 5
    assert len(data["gallery"]) == 10
    assert len(data["results"]) == 10
    assert [n["type"] for n in data["notifications"]] == ["POSTER"] * 5
    # newest first
    assert data["gallery"][0]["title"] == "gallery-11"
    assert data["results"][0]["title"] == "result-10"
    assert data["banners"][0]["title"] == "banner-6"


def test_home_failure_is_all_or_nothing(client, db):
    db.add(Course(title="JEE", description="d"))
    db.commit()

    def broken_factory():
        raise RuntimeError("database unavailable")

    app.dependency_overrides[get_session_factory] = lambda: broken_factory

    r = client.get("/public/home")
    assert r.status_code == 500
    assert r.json() == {"message": "Failed to load homepage data"}


def test_poster_to_notification():
    poster = {"id": "p1", "title": None, "fileUrl": "/uploads/p1.png", "createdAt": "2026-01-01T00:00:00"}
    assert poster_to_notification(poster) == {
        "id": "p1",
        "message": "Announcement",
        "link": "/uploads/p1.png",
        "type": "POSTER",
        "isActive": True,
        "createdAt": "2026-01-01T00:00:00",
    }


def test_merge_posters_keeps_each_group_in_order():
    posters = [{"id": "p1", "title": "A", "fileUrl": "/a"}, {"id": "p2", "title": "B", "fileUrl": "/b"}]
    notes = [{"id": "n1", "message": "x"}, {"id": "n2", "message": "y"}]
    merged = merge_posters(posters, notes)
    assert [m["id"] for m in merged] == ["p1", "p2", "n1", "n2"]


def test_split_faculty_drops_unknown_categories():
    members = [
        {"name": "a", "category": "TEACHING"},
        {"name": "b", "category": "LEADERSHIP"},
        {"name": "c", "category": "GUEST"},
        {"name": "d", "category": "TEACHING"},
    ]
    teaching, leadership = split_faculty(members)
    assert [m["name"] for m in teaching] == ["a", "d"]
    assert [m["name"] for m in leadership] == ["b"]
