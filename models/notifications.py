from sqlalchemy import Column, String, Text, Boolean, DateTime
from database import Base
from models.common import new_id
from datetime import datetime


class Notification(Base):
    __tablename__ = "notifications"
    id = Column(String(36), primary_key=True, default=new_id)
    message = Column(Text, nullable=False)
    link = Column(String(500), nullable=True)
    type = Column(String(20), nullable=False, default="INFO")  # INFO, POPUP, ...
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
