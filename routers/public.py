"""Unauthenticated read endpoints for the landing page."""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db, get_session_factory
from models.assets import Asset, AssetType
from models.faculty import Faculty, FacultyCategory
from models.notifications import Notification
from models.videos import Video, VideoType
from routers.courses import courses_with_counts
from schemas.assets import AssetOut
from schemas.common import dump
from schemas.faculty import FacultyOut
from schemas.notifications import NotificationOut
from schemas.videos import VideoOut

router = APIRouter(prefix="/public", tags=["Public"])
logger = logging.getLogger(__name__)

POSTER_FALLBACK_MESSAGE = "Announcement"
POSTER_TYPE = "POSTER"

BANNER_LIMIT = 5
GALLERY_LIMIT = 10
RESULT_LIMIT = 10
POSTER_LIMIT = 5


# ===============================
#  Queries (one session each)
# ===============================

def _faculty_with_photos(db: Session) -> List[dict]:
    members = db.query(Faculty).order_by(Faculty.created_at.asc()).all()
    return [dump(FacultyOut, m) for m in members]


def _active_notifications(db: Session) -> List[dict]:
    rows = (
        db.query(Notification)
        .filter(Notification.is_active == True)  # noqa: E712
        .order_by(Notification.created_at.desc())
        .all()
    )
    return [dump(NotificationOut, n) for n in rows]


def _latest_assets(asset_type: AssetType, limit: int) -> Callable[[Session], List[dict]]:
    def query(db: Session) -> List[dict]:
        rows = (
            db.query(Asset)
            .filter(Asset.type == asset_type.value)
            .order_by(Asset.created_at.desc())
            .limit(limit)
            .all()
        )
        return [dump(AssetOut, a) for a in rows]

    return query


HOME_QUERIES: Dict[str, Callable[[Session], List[dict]]] = {
    "courses": lambda db: courses_with_counts(db, active_only=True),
    "faculty": _faculty_with_photos,
    "notifications": _active_notifications,
    "banners": _latest_assets(AssetType.BANNER, BANNER_LIMIT),
    "gallery": _latest_assets(AssetType.GALLERY, GALLERY_LIMIT),
    "results": _latest_assets(AssetType.RESULT, RESULT_LIMIT),
    "posters": _latest_assets(AssetType.POSTER, POSTER_LIMIT),
}


# ===============================
#  Transforms
# ===============================

def poster_to_notification(poster: dict) -> dict:
    return {
        "id": poster["id"],
        "message": poster.get("title") or POSTER_FALLBACK_MESSAGE,
        "link": poster.get("fileUrl"),
        "type": POSTER_TYPE,
        "isActive": True,
        "createdAt": poster.get("createdAt"),
    }


def merge_posters(posters: List[dict], notifications: List[dict]) -> List[dict]:
    """Posters first, then genuine notifications, each group keeping its order."""
    return [poster_to_notification(p) for p in posters] + list(notifications)


def split_faculty(members: List[dict]) -> Tuple[List[dict], List[dict]]:
    """(teaching, leadership). Any other category is left out of both."""
    teaching = [m for m in members if m.get("category") == FacultyCategory.TEACHING.value]
    leadership = [m for m in members if m.get("category") == FacultyCategory.LEADERSHIP.value]
    return teaching, leadership


def _run_query(session_factory, query: Callable[[Session], List[dict]]) -> List[dict]:
    db = session_factory()
    try:
        return query(db)
    finally:
        db.close()


async def load_home_data(session_factory) -> dict:
    """Runs every homepage query concurrently; any failure fails the whole load."""
    names = list(HOME_QUERIES)
    results = await asyncio.gather(
        *(run_in_threadpool(_run_query, session_factory, HOME_QUERIES[name]) for name in names)
    )
    raw = dict(zip(names, results))

    teaching, leadership = split_faculty(raw["faculty"])
    return {
        "courses": raw["courses"],
        "faculty": teaching,
        "leadership": leadership,
        "notifications": merge_posters(raw["posters"], raw["notifications"]),
        "banners": raw["banners"],
        "gallery": raw["gallery"],
        "results": raw["results"],
    }


def empty_home_data() -> dict:
    return {key: [] for key in ("courses", "faculty", "leadership", "notifications", "banners", "gallery", "results")}


# ===============================
#  Endpoints
# ===============================

@router.get("/home")
async def get_public_home_data(session_factory=Depends(get_session_factory)):
    try:
        data = await load_home_data(session_factory)
    except Exception:
        logger.exception("Public home data failed")
        raise HTTPException(status_code=500, detail="Failed to load homepage data")
    return {"success": True, "data": data}


@router.get("/videos")
def get_public_videos(type: Optional[VideoType] = Query(None), db: Session = Depends(get_db)):
    try:
        query = db.query(Video)
        if type is not None:
            query = query.filter(Video.type == type.value)
        videos = [dump(VideoOut, v) for v in query.order_by(Video.created_at.desc()).all()]
    except SQLAlchemyError:
        logger.exception("Public videos failed")
        raise HTTPException(status_code=500, detail="Failed to load videos")
    return {"success": True, "videos": videos}
