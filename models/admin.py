from sqlalchemy import Column, String, DateTime
from database import Base
from models.common import new_id
from datetime import datetime


class Admin(Base):
    __tablename__ = "admins"
    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="ADMIN")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
