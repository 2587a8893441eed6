import logging
from datetime import datetime, timedelta

from config import get_settings
from database import SessionLocal, engine, Base
from models.admin import Admin
from models.courses import Course, Batch
from models.notifications import Notification
from security import hash_password

logger = logging.getLogger("seed")

# Creates missing tables
Base.metadata.create_all(bind=engine)


def seed_admin(db, username: str, password: str) -> None:
    if not password:
        logger.warning("ADMIN_PASSWORD not set, skipping admin account")
        return

    exists = db.query(Admin).filter_by(username=username).first()
    if exists:
        logger.info("Admin exists: %s", username)
        return

    db.add(Admin(username=username, password_hash=hash_password(password), role="ADMIN"))
    db.commit()
    logger.info("Added admin: %s", username)


def seed_content(db) -> None:
    # 1. COURSES (each with one upcoming batch)
    courses = [
        {"title": "JEE Main & Advanced", "description": "Two year classroom programme for engineering entrance."},
        {"title": "NEET", "description": "Medical entrance preparation with weekly tests."},
        {"title": "Foundation (Class 9-10)", "description": "Concept building for board and olympiad students."},
    ]
    start = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=30)

    for c in courses:
        exists = db.query(Course).filter_by(title=c["title"]).first()
        if exists:
            logger.info("Course exists: %s", c["title"])
            continue
        course = Course(title=c["title"], description=c["description"], is_active=True)
        db.add(course)
        db.flush()
        db.add(Batch(name=f"{c['title']} - Morning", course_id=course.id, start_date=start, is_active=True))
        logger.info("Added course: %s", c["title"])
    db.commit()

    # 2. WELCOME NOTICE
    message = "Admissions open for the new session."
    if not db.query(Notification).filter_by(message=message).first():
        db.add(Notification(message=message, type="INFO", is_active=True))
        db.commit()
        logger.info("Added notification")


def seed_data() -> None:
    settings = get_settings()
    db = SessionLocal()
    try:
        seed_admin(db, settings.admin_username, settings.admin_password)
        seed_content(db)
    finally:
        db.close()
    logger.info("All data seeded")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    seed_data()
