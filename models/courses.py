from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from database import Base
from models.common import new_id
from datetime import datetime


class Course(Base):
    __tablename__ = "courses"
    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


# Batch -> Course is a lookup only. No FK constraint and no cascade, so a
# deleted course leaves its batches behind pointing at a dead id.
class Batch(Base):
    __tablename__ = "batches"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    course_id = Column(String(36), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    course = relationship(
        "Course",
        primaryjoin="foreign(Batch.course_id) == Course.id",
        viewonly=True,
        lazy="joined",
    )
