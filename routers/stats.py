import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.analytics import PageVisit
from models.assets import Asset
from models.courses import Course, Batch
from models.faculty import Faculty
from models.notifications import Notification
from models.videos import Video

router = APIRouter(prefix="/admin", tags=["Dashboard"])
logger = logging.getLogger(__name__)

TOP_PATHS = 5
TREND_DAYS = 7


def visit_stats(db: Session, now: datetime = None) -> dict:
    now = now or datetime.utcnow()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    window_start = today - timedelta(days=TREND_DAYS - 1)

    total = db.query(func.count(PageVisit.id)).scalar() or 0
    today_count = db.query(func.count(PageVisit.id)).filter(PageVisit.timestamp >= today).scalar() or 0

    # Bucket in Python so SQLite and PostgreSQL behave the same
    per_day = {(window_start + timedelta(days=i)).date(): 0 for i in range(TREND_DAYS)}
    recent = db.query(PageVisit.timestamp).filter(PageVisit.timestamp >= window_start).all()
    for (ts,) in recent:
        if ts.date() in per_day:
            per_day[ts.date()] += 1

    top_paths = (
        db.query(PageVisit.path, func.count(PageVisit.id).label("visits"))
        .group_by(PageVisit.path)
        .order_by(func.count(PageVisit.id).desc(), PageVisit.path.asc())
        .limit(TOP_PATHS)
        .all()
    )

    return {
        "total": total,
        "today": today_count,
        "daily": [{"date": day.isoformat(), "visits": count} for day, count in per_day.items()],
        "topPaths": [{"path": path, "visits": visits} for path, visits in top_paths],
    }


@router.get("/stats")
def admin_stats(db: Session = Depends(get_db)):
    try:
        stats = {
            "courses": db.query(Course).count(),
            "activeCourses": db.query(Course).filter(Course.is_active == True).count(),  # noqa: E712
            "batches": db.query(Batch).count(),
            "faculty": db.query(Faculty).count(),
            "assets": db.query(Asset).count(),
            "notifications": db.query(Notification).count(),
            "videos": db.query(Video).count(),
            "visits": visit_stats(db),
        }
    except SQLAlchemyError:
        logger.exception("Stats query failed")
        raise HTTPException(status_code=500, detail="Failed to load stats")
    return {"success": True, "stats": stats}
