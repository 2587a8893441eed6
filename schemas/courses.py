from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class CourseCount(CamelModel):
    batches: int = 0


class CourseOut(CamelModel):
    id: str
    title: str
    description: str
    is_active: bool
    created_at: datetime
    count: CourseCount = Field(default_factory=CourseCount, alias="_count")


class CourseCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None


class CourseUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class CourseStatus(CamelModel):
    is_active: bool


# --- Batches ---

class BatchCourse(CamelModel):
    title: str


class BatchOut(CamelModel):
    id: str
    name: str
    course_id: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    course: Optional[BatchCourse] = None  # None once the course is deleted


class BatchCreate(CamelModel):
    name: Optional[str] = None
    course_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class BatchUpdate(CamelModel):
    name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
