"""Admin session: signed JWT carried in one HTTP-only cookie."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from config import get_settings
from database import get_db
from models.admin import Admin

logger = logging.getLogger(__name__)
settings = get_settings()

ADMIN_ROLE = "ADMIN"

# Shared by set and clear; a cookie is only removed when the clear matches
# the attributes it was issued with.
COOKIE_OPTIONS = {
    "httponly": True,
    "secure": settings.cookie_secure,
    "samesite": settings.cookie_samesite,
    "path": "/",
    "domain": settings.cookie_domain,
}


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def authenticate(db: Session, username: Optional[str], password: Optional[str]) -> Optional[Admin]:
    """Returns the admin for a valid username/password pair, else None."""
    if not username or not password:
        return None
    admin = db.query(Admin).filter(Admin.username == username.strip()).first()
    if admin is None or not verify_password(password, admin.password_hash):
        return None
    return admin


def create_session_token(admin: Admin, ttl: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (ttl if ttl is not None else timedelta(seconds=settings.session_ttl_seconds))
    to_encode = {"sub": admin.id, "role": admin.role, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: Optional[str]) -> Optional[dict]:
    """Payload of a valid, unexpired token; None otherwise."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if not payload.get("sub") or payload.get("role") != ADMIN_ROLE:
        return None
    return payload


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        **COOKIE_OPTIONS,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session_cookie_name, **COOKIE_OPTIONS)


def current_admin(request: Request, db: Session) -> Optional[Admin]:
    payload = decode_session_token(request.cookies.get(settings.session_cookie_name))
    if payload is None:
        return None
    return db.query(Admin).filter(Admin.id == payload["sub"]).first()


def require_admin(request: Request, db: Session = Depends(get_db)) -> Admin:
    admin = current_admin(request, db)
    if admin is None:
        # Same answer for missing, garbage, expired or stale tokens
        raise HTTPException(status_code=401, detail="Unauthorized")
    return admin
