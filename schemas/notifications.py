from datetime import datetime
from typing import Optional

from schemas.common import CamelModel


class NotificationOut(CamelModel):
    id: str
    message: str
    link: Optional[str] = None
    type: str
    is_active: bool
    created_at: datetime


class NotificationCreate(CamelModel):
    message: Optional[str] = None
    link: Optional[str] = None
    type: Optional[str] = None
    is_active: Optional[bool] = None


class NotificationUpdate(CamelModel):
    message: Optional[str] = None
    link: Optional[str] = None
    type: Optional[str] = None
    is_active: Optional[bool] = None
