from datetime import datetime
from typing import Optional

from models.faculty import FacultyCategory
from schemas.assets import AssetOut
from schemas.common import CamelModel


class FacultyOut(CamelModel):
    id: str
    name: str
    designation: str
    bio: Optional[str] = None
    category: str
    photo_id: Optional[str] = None
    photo: Optional[AssetOut] = None
    created_at: datetime


class FacultyCreate(CamelModel):
    name: Optional[str] = None
    designation: Optional[str] = None
    bio: Optional[str] = None
    category: FacultyCategory = FacultyCategory.TEACHING.value
    photo_url: Optional[str] = None


class FacultyUpdate(CamelModel):
    name: Optional[str] = None
    designation: Optional[str] = None
    bio: Optional[str] = None
    category: Optional[FacultyCategory] = None
    photo_url: Optional[str] = None
