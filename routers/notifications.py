import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.notifications import Notification
from schemas.common import dump, changes
from schemas.notifications import NotificationOut, NotificationCreate, NotificationUpdate

router = APIRouter(prefix="/admin/notifications", tags=["Notifications"])
logger = logging.getLogger(__name__)

CLEARABLE = ("link",)


@router.post("")
def create_notification(payload: NotificationCreate, db: Session = Depends(get_db)):
    if not payload.message:
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        notification = Notification(
            message=payload.message,
            link=payload.link or None,
            type=(payload.type or "INFO").upper(),
            is_active=True if payload.is_active is None else payload.is_active,
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create notification failed")
        raise HTTPException(status_code=500, detail="Failed to create notification")

    return {"success": True, "notification": dump(NotificationOut, notification)}


@router.get("")
def get_notifications(db: Session = Depends(get_db)):
    try:
        rows = db.query(Notification).order_by(Notification.created_at.desc()).all()
        data = [dump(NotificationOut, n) for n in rows]
    except SQLAlchemyError:
        logger.exception("List notifications failed")
        raise HTTPException(status_code=500, detail="Failed to fetch notifications")
    return {"success": True, "notifications": data}


# PATCH is what the console uses for the on/off toggle; PUT edits the rest.
@router.api_route("/{notification_id}", methods=["PUT", "PATCH"])
def update_notification(notification_id: str, payload: NotificationUpdate, db: Session = Depends(get_db)):
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")

    try:
        fields = changes(payload, CLEARABLE)
        if "type" in fields:
            fields["type"] = fields["type"].upper()
        for field, value in fields.items():
            setattr(notification, field, value)
        db.commit()
        db.refresh(notification)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update notification %s failed", notification_id)
        raise HTTPException(status_code=500, detail="Failed to update notification")
    return {"success": True, "notification": dump(NotificationOut, notification)}


@router.delete("/{notification_id}")
def delete_notification(notification_id: str, db: Session = Depends(get_db)):
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")

    try:
        db.delete(notification)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete notification %s failed", notification_id)
        raise HTTPException(status_code=500, detail="Failed to delete notification")
    return {"success": True}
