import enum
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from database import Base
from models.common import new_id
from models.assets import Asset  # noqa: F401
from datetime import datetime


class FacultyCategory(str, enum.Enum):
    TEACHING = "TEACHING"
    LEADERSHIP = "LEADERSHIP"


class Faculty(Base):
    __tablename__ = "faculty"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    designation = Column(String(200), nullable=False)
    bio = Column(Text, nullable=True)
    # Plain string on purpose: rows outside the two known categories are
    # tolerated on read and simply not displayed.
    category = Column(String(30), nullable=False, default=FacultyCategory.TEACHING.value)
    photo_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    photo = relationship(
        "Asset",
        primaryjoin="foreign(Faculty.photo_id) == Asset.id",
        viewonly=True,
        lazy="joined",
    )
