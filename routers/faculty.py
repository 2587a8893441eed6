import logging
import mimetypes

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.admin import Admin
from models.assets import Asset, AssetType
from models.faculty import Faculty
from schemas.common import dump, changes
from schemas.faculty import FacultyOut, FacultyCreate, FacultyUpdate
from security import require_admin

router = APIRouter(prefix="/admin/faculty", tags=["Faculty"])
logger = logging.getLogger(__name__)

CLEARABLE = ("bio",)


def _photo_asset(name: str, url: str, admin_id: str) -> Asset:
    return Asset(
        title=name,
        type=AssetType.FACULTY.value,
        file_url=url,
        mime_type=mimetypes.guess_type(url)[0] or "image/jpeg",
        size=0,
        admin_id=admin_id,
    )


def _get_or_404(db: Session, faculty_id: str) -> Faculty:
    member = db.query(Faculty).filter(Faculty.id == faculty_id).first()
    if member is None:
        raise HTTPException(status_code=404, detail="Faculty not found")
    return member


@router.post("")
def create_faculty(payload: FacultyCreate, admin: Admin = Depends(require_admin), db: Session = Depends(get_db)):
    if not payload.name or not payload.designation or not payload.photo_url:
        raise HTTPException(status_code=400, detail="Name, designation and photo are required")

    try:
        photo = _photo_asset(payload.name, payload.photo_url, admin.id)
        db.add(photo)
        db.flush()

        member = Faculty(
            name=payload.name,
            designation=payload.designation,
            bio=payload.bio,
            category=payload.category,
            photo_id=photo.id,
        )
        db.add(member)
        db.commit()
        db.refresh(member)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create faculty failed")
        raise HTTPException(status_code=500, detail="Failed to save profile")

    return {"success": True, "faculty": dump(FacultyOut, member)}


@router.get("")
def get_faculty(db: Session = Depends(get_db)):
    try:
        members = db.query(Faculty).order_by(Faculty.created_at.asc()).all()
        data = [dump(FacultyOut, m) for m in members]
    except SQLAlchemyError:
        logger.exception("List faculty failed")
        raise HTTPException(status_code=500, detail="Failed to fetch faculty")
    return {"success": True, "faculty": data}


@router.put("/{faculty_id}")
def update_faculty(
    faculty_id: str,
    payload: FacultyUpdate,
    admin: Admin = Depends(require_admin),
    db: Session = Depends(get_db),
):
    member = _get_or_404(db, faculty_id)
    try:
        fields = changes(payload, CLEARABLE)
        photo_url = fields.pop("photo_url", None)
        for field, value in fields.items():
            setattr(member, field, value)

        # A new photo becomes a new asset; the old one is not removed
        if photo_url and (member.photo is None or member.photo.file_url != photo_url):
            photo = _photo_asset(member.name, photo_url, admin.id)
            db.add(photo)
            db.flush()
            member.photo_id = photo.id

        db.commit()
        db.refresh(member)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update faculty %s failed", faculty_id)
        raise HTTPException(status_code=500, detail="Failed to update profile")
    return {"success": True, "faculty": dump(FacultyOut, member)}


@router.delete("/{faculty_id}")
def delete_faculty(faculty_id: str, db: Session = Depends(get_db)):
    member = _get_or_404(db, faculty_id)
    try:
        db.delete(member)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete faculty %s failed", faculty_id)
        raise HTTPException(status_code=500, detail="Failed to delete profile")
    return {"success": True}
