import enum
from sqlalchemy import Column, String, Integer, DateTime
from database import Base
from models.common import new_id
from datetime import datetime


class AssetType(str, enum.Enum):
    GALLERY = "GALLERY"
    RESULT = "RESULT"
    BANNER = "BANNER"
    POSTER = "POSTER"
    IMAGE = "IMAGE"
    FACULTY = "FACULTY"  # faculty profile photos


# Generic media record; `type` decides which public section shows it
class Asset(Base):
    __tablename__ = "assets"
    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, index=True)
    file_url = Column(String(500), nullable=False)
    mime_type = Column(String(100), nullable=False, default="image/jpeg")
    size = Column(Integer, nullable=False, default=0)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)

    # Result cards only
    category_group = Column(String(50), nullable=True)  # e.g. ENTRANCE, BOARDS
    sub_category = Column(String(100), nullable=True)
    rank = Column(String(50), nullable=True)

    admin_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
