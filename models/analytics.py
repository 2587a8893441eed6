from sqlalchemy import Column, String, DateTime
from database import Base
from models.common import new_id
from datetime import datetime


# Append-only visit log
class PageVisit(Base):
    __tablename__ = "page_visits"
    id = Column(String(36), primary_key=True, default=new_id)
    path = Column(String(500), nullable=False, index=True)
    ip_address = Column(String(100), nullable=False, default="unknown")
    user_agent = Column(String(500), nullable=False, default="unknown")
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
