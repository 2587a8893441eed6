import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.videos import Video
from schemas.common import dump, changes
from schemas.videos import VideoOut, VideoCreate, VideoUpdate

router = APIRouter(prefix="/admin/videos", tags=["Videos"])
logger = logging.getLogger(__name__)

CLEARABLE = ("description",)

# watch?v=, embed/, v/, shorts/ and youtu.be links
YOUTUBE_ID_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/|youtube\.com/shorts/)([^\"&?/\s]{11})",
    re.I,
)


def youtube_id(url: Optional[str]) -> Optional[str]:
    """Extracts the 11 character video id from a YouTube URL."""
    if not url:
        return None
    match = YOUTUBE_ID_RE.search(url)
    return match.group(1) if match else None


def _apply_url(video: Video, url: str) -> None:
    video.video_url = url
    video.external_id = youtube_id(url)
    video.platform = "YOUTUBE" if video.external_id else "OTHER"


@router.post("")
def create_video(payload: VideoCreate, db: Session = Depends(get_db)):
    if not payload.title or not payload.video_url:
        raise HTTPException(status_code=400, detail="Please provide both a title and a valid video URL")

    try:
        video = Video(
            title=payload.title,
            description=payload.description,
            category=payload.category,
            type=payload.type,
        )
        _apply_url(video, payload.video_url)
        db.add(video)
        db.commit()
        db.refresh(video)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create video failed")
        raise HTTPException(status_code=500, detail="Failed to save video")

    return {"success": True, "video": dump(VideoOut, video)}


@router.get("")
def get_videos(db: Session = Depends(get_db)):
    try:
        videos = db.query(Video).order_by(Video.created_at.desc()).all()
        data = [dump(VideoOut, v) for v in videos]
    except SQLAlchemyError:
        logger.exception("List videos failed")
        raise HTTPException(status_code=500, detail="Failed to fetch videos")
    return {"success": True, "videos": data}


@router.put("/{video_id}")
def update_video(video_id: str, payload: VideoUpdate, db: Session = Depends(get_db)):
    video = db.query(Video).filter(Video.id == video_id).first()
    if video is None:
        raise HTTPException(status_code=404, detail="Video not found")

    try:
        fields = changes(payload, CLEARABLE)
        url = fields.pop("video_url", None)
        for field, value in fields.items():
            setattr(video, field, value)
        if url:
            _apply_url(video, url)
        db.commit()
        db.refresh(video)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update video %s failed", video_id)
        raise HTTPException(status_code=500, detail="Failed to update video")
    return {"success": True, "video": dump(VideoOut, video)}


@router.delete("/{video_id}")
def delete_video(video_id: str, db: Session = Depends(get_db)):
    video = db.query(Video).filter(Video.id == video_id).first()
    if video is None:
        raise HTTPException(status_code=404, detail="Video not found")

    try:
        db.delete(video)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete video %s failed", video_id)
        raise HTTPException(status_code=500, detail="Failed to delete video")
    return {"success": True}
