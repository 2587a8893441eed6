import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from database import get_db
from models.admin import Admin
from schemas.auth import LoginSchema, AdminOut
from schemas.common import dump
from security import authenticate, create_session_token, set_session_cookie, clear_session_cookie, require_admin

router = APIRouter(prefix="/admin", tags=["Authentication"])
logger = logging.getLogger(__name__)


# 1. Login (issues the session cookie)
@router.post("/login")
def process_login(response: Response, data: LoginSchema, db: Session = Depends(get_db)):
    admin = authenticate(db, data.username, data.password)
    if admin is None:
        # Never say which of the two fields was wrong
        raise HTTPException(status_code=401, detail="Invalid credentials")

    set_session_cookie(response, create_session_token(admin))
    logger.info("Admin %s logged in", admin.username)
    return {"success": True, "admin": dump(AdminOut, admin)}


# 2. Logout (clears with the same cookie attributes)
@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"success": True}


# 3. Who am I
@router.get("/me")
def read_me(admin: Admin = Depends(require_admin)):
    return {"success": True, "admin": dump(AdminOut, admin)}
