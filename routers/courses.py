import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.courses import Course, Batch
from schemas.common import changes
from schemas.courses import CourseOut, CourseCount, CourseCreate, CourseUpdate, CourseStatus

router = APIRouter(prefix="/admin/courses", tags=["Courses"])
logger = logging.getLogger(__name__)


def course_out(course: Course, batch_count: int = 0) -> dict:
    data = CourseOut.model_validate(course)
    data.count = CourseCount(batches=batch_count)
    return data.model_dump(by_alias=True, mode="json")


def courses_with_counts(db: Session, active_only: bool = False) -> list:
    """Courses newest first, each with the number of batches pointing at it."""
    batch_counts = (
        db.query(Batch.course_id, func.count(Batch.id).label("batches"))
        .group_by(Batch.course_id)
        .subquery()
    )
    query = db.query(Course, func.coalesce(batch_counts.c.batches, 0)).outerjoin(
        batch_counts, batch_counts.c.course_id == Course.id
    )
    if active_only:
        query = query.filter(Course.is_active == True)  # noqa: E712
    rows = query.order_by(Course.created_at.desc()).all()
    return [course_out(course, count) for course, count in rows]


def _get_or_404(db: Session, course_id: str) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


def _batch_count(db: Session, course_id: str) -> int:
    return db.query(func.count(Batch.id)).filter(Batch.course_id == course_id).scalar() or 0


# --- Create ---
@router.post("")
def create_course(payload: CourseCreate, db: Session = Depends(get_db)):
    if not payload.title or not payload.description:
        raise HTTPException(status_code=400, detail="Title and description are required")

    try:
        course = Course(title=payload.title, description=payload.description, is_active=True)
        db.add(course)
        db.commit()
        db.refresh(course)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create course failed")
        raise HTTPException(status_code=500, detail="Failed to create course")

    return {"success": True, "course": course_out(course)}


# --- List ---
@router.get("")
def get_courses(db: Session = Depends(get_db)):
    try:
        courses = courses_with_counts(db)
    except SQLAlchemyError:
        logger.exception("List courses failed")
        raise HTTPException(status_code=500, detail="Failed to fetch courses")
    return {"success": True, "courses": courses}


# --- Update (partial) ---
@router.put("/{course_id}")
def update_course(course_id: str, payload: CourseUpdate, db: Session = Depends(get_db)):
    course = _get_or_404(db, course_id)
    try:
        for field, value in changes(payload).items():
            setattr(course, field, value)
        db.commit()
        db.refresh(course)
        count = _batch_count(db, course.id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update course %s failed", course_id)
        raise HTTPException(status_code=500, detail="Failed to update course")
    return {"success": True, "course": course_out(course, count)}


# --- Toggle active flag ---
@router.patch("/{course_id}/status")
def toggle_course_status(course_id: str, payload: CourseStatus, db: Session = Depends(get_db)):
    course = _get_or_404(db, course_id)
    try:
        course.is_active = payload.is_active
        db.commit()
        db.refresh(course)
        count = _batch_count(db, course.id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Toggle course %s failed", course_id)
        raise HTTPException(status_code=500, detail="Failed to update course")
    return {"success": True, "course": course_out(course, count)}


# --- Delete (batches are left in place) ---
@router.delete("/{course_id}")
def delete_course(course_id: str, db: Session = Depends(get_db)):
    course = _get_or_404(db, course_id)
    try:
        db.delete(course)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete course %s failed", course_id)
        raise HTTPException(status_code=500, detail="Failed to delete course")
    return {"success": True}
