import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.courses import Course, Batch
from schemas.common import dump, changes
from schemas.courses import BatchOut, BatchCreate, BatchUpdate

router = APIRouter(prefix="/admin/batches", tags=["Batches"])
logger = logging.getLogger(__name__)

# Optional columns an update may clear with an explicit null
CLEARABLE = ("end_date",)


def _get_or_404(db: Session, batch_id: str) -> Batch:
    batch = db.query(Batch).filter(Batch.id == batch_id).first()
    if batch is None:
        raise HTTPException(status_code=404, detail="Batch not found")
    return batch


@router.post("")
def create_batch(payload: BatchCreate, db: Session = Depends(get_db)):
    if not payload.name or not payload.course_id or not payload.start_date:
        raise HTTPException(status_code=400, detail="Name, Course, and Start Date are required")

    # No orphan batches at creation time
    if db.query(Course.id).filter(Course.id == payload.course_id).first() is None:
        raise HTTPException(status_code=400, detail="Course does not exist")

    try:
        batch = Batch(
            name=payload.name,
            course_id=payload.course_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            is_active=True,
        )
        db.add(batch)
        db.commit()
        db.refresh(batch)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create batch failed")
        raise HTTPException(status_code=500, detail="Failed to create batch")

    return {"success": True, "batch": dump(BatchOut, batch)}


@router.get("")
def get_batches(db: Session = Depends(get_db)):
    try:
        batches = db.query(Batch).order_by(Batch.start_date.desc()).all()
        data = [dump(BatchOut, b) for b in batches]
    except SQLAlchemyError:
        logger.exception("List batches failed")
        raise HTTPException(status_code=500, detail="Failed to fetch batches")
    return {"success": True, "batches": data}


@router.put("/{batch_id}")
def update_batch(batch_id: str, payload: BatchUpdate, db: Session = Depends(get_db)):
    batch = _get_or_404(db, batch_id)
    try:
        for field, value in changes(payload, CLEARABLE).items():
            setattr(batch, field, value)
        db.commit()
        db.refresh(batch)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update batch %s failed", batch_id)
        raise HTTPException(status_code=500, detail="Failed to update batch")
    return {"success": True, "batch": dump(BatchOut, batch)}


@router.delete("/{batch_id}")
def delete_batch(batch_id: str, db: Session = Depends(get_db)):
    batch = _get_or_404(db, batch_id)
    try:
        db.delete(batch)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete batch %s failed", batch_id)
        raise HTTPException(status_code=500, detail="Failed to delete batch")
    return {"success": True}
