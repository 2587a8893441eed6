from datetime import datetime
from typing import Optional

from models.assets import AssetType
from schemas.common import CamelModel


class AssetOut(CamelModel):
    id: str
    title: str
    type: str
    file_url: str
    mime_type: str
    size: int
    width: Optional[int] = None
    height: Optional[int] = None
    category_group: Optional[str] = None
    sub_category: Optional[str] = None
    rank: Optional[str] = None
    created_at: datetime


class AssetCreate(CamelModel):
    title: Optional[str] = None
    type: Optional[AssetType] = None
    url: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    category_group: Optional[str] = None
    sub_category: Optional[str] = None
    rank: Optional[str] = None


class AssetUpdate(CamelModel):
    title: Optional[str] = None
    type: Optional[AssetType] = None
    category_group: Optional[str] = None
    sub_category: Optional[str] = None
    rank: Optional[str] = None
