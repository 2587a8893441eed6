import logging
import mimetypes
import os
import shutil
import uuid

from fastapi import APIRouter, Depends, HTTPException, File, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import get_settings
from database import get_db
from models.admin import Admin
from models.assets import Asset
from schemas.assets import AssetOut, AssetCreate, AssetUpdate
from schemas.common import dump, changes
from security import require_admin

router = APIRouter(prefix="/admin", tags=["Assets"])
logger = logging.getLogger(__name__)
settings = get_settings()

CLEARABLE = ("category_group", "sub_category", "rank")


def _get_or_404(db: Session, asset_id: str) -> Asset:
    asset = db.query(Asset).filter(Asset.id == asset_id).first()
    if asset is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return asset


# ===============================
#  UPLOAD (file -> public URL)
# ===============================
@router.post("/upload")
async def upload_file(file: UploadFile = File(...)):
    os.makedirs(settings.upload_dir, exist_ok=True)

    file_ext = os.path.splitext(file.filename or "")[1].lower()
    unique_name = f"{uuid.uuid4().hex}{file_ext}"
    file_path = os.path.join(settings.upload_dir, unique_name)

    try:
        with open(file_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError:
        logger.exception("Upload of %s failed", file.filename)
        raise HTTPException(status_code=500, detail="Upload failed")

    mime_type = file.content_type or mimetypes.guess_type(unique_name)[0] or "application/octet-stream"
    return {
        "success": True,
        "url": f"{settings.upload_url_prefix}/{unique_name}",
        "size": os.path.getsize(file_path),
        "mimeType": mime_type,
    }


# ===============================
#  ASSET CRUD
# ===============================
@router.post("/assets")
def create_asset(payload: AssetCreate, admin: Admin = Depends(require_admin), db: Session = Depends(get_db)):
    if not payload.title or not payload.url or not payload.type:
        raise HTTPException(status_code=400, detail="Missing required fields")

    try:
        asset = Asset(
            title=payload.title,
            type=payload.type,
            file_url=payload.url,
            mime_type=payload.mime_type or mimetypes.guess_type(payload.url)[0] or "image/jpeg",
            size=payload.size or 0,
            width=payload.width,
            height=payload.height,
            category_group=payload.category_group,
            sub_category=payload.sub_category,
            rank=payload.rank,
            admin_id=admin.id,
        )
        db.add(asset)
        db.commit()
        db.refresh(asset)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create asset failed")
        raise HTTPException(status_code=500, detail="Failed to save asset")

    return {"success": True, "asset": dump(AssetOut, asset)}


@router.get("/assets")
def get_assets(db: Session = Depends(get_db)):
    try:
        assets = db.query(Asset).order_by(Asset.created_at.desc()).all()
        data = [dump(AssetOut, a) for a in assets]
    except SQLAlchemyError:
        logger.exception("List assets failed")
        raise HTTPException(status_code=500, detail="Failed to fetch assets")
    return {"success": True, "assets": data}


@router.put("/assets/{asset_id}")
def update_asset(asset_id: str, payload: AssetUpdate, db: Session = Depends(get_db)):
    asset = _get_or_404(db, asset_id)
    try:
        for field, value in changes(payload, CLEARABLE).items():
            setattr(asset, field, value)
        db.commit()
        db.refresh(asset)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update asset %s failed", asset_id)
        raise HTTPException(status_code=500, detail="Update failed")
    return {"success": True, "asset": dump(AssetOut, asset)}


# The stored file is left where it is; faculty rows pointing here keep the id.
@router.delete("/assets/{asset_id}")
def delete_asset(asset_id: str, db: Session = Depends(get_db)):
    asset = _get_or_404(db, asset_id)
    try:
        db.delete(asset)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete asset %s failed", asset_id)
        raise HTTPException(status_code=500, detail="Delete failed")
    return {"success": True}
