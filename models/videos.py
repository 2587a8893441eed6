import enum
from sqlalchemy import Column, String, Text, DateTime
from database import Base
from models.common import new_id
from datetime import datetime


class VideoCategory(str, enum.Enum):
    STUDENT_STORY = "STUDENT_STORY"
    ACHIEVEMENT = "ACHIEVEMENT"
    ALUMNI = "ALUMNI"
    INSTITUTE = "INSTITUTE"
    FACULTY = "FACULTY"


class VideoType(str, enum.Enum):
    LONG_FORM = "LONG_FORM"
    SHORT = "SHORT"  # reels


class Video(Base):
    __tablename__ = "videos"
    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    video_url = Column(String(500), nullable=False)
    external_id = Column(String(50), nullable=True)  # YouTube video id
    description = Column(Text, nullable=True)
    category = Column(String(30), nullable=False, default=VideoCategory.INSTITUTE.value)
    type = Column(String(20), nullable=False, default=VideoType.LONG_FORM.value)
    platform = Column(String(20), nullable=False, default="YOUTUBE")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
