from datetime import datetime
from typing import Optional

from models.videos import VideoCategory, VideoType
from schemas.common import CamelModel


class VideoOut(CamelModel):
    id: str
    title: str
    video_url: str
    external_id: Optional[str] = None
    description: Optional[str] = None
    category: str
    type: str
    platform: str
    created_at: datetime


class VideoCreate(CamelModel):
    title: Optional[str] = None
    video_url: Optional[str] = None
    description: Optional[str] = None
    category: VideoCategory = VideoCategory.INSTITUTE.value
    type: VideoType = VideoType.LONG_FORM.value


class VideoUpdate(CamelModel):
    title: Optional[str] = None
    video_url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[VideoCategory] = None
    type: Optional[VideoType] = None
