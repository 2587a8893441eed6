import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from config import TEMPLATE_DIR, get_settings
from database import get_db
from security import current_admin

settings = get_settings()
logger = logging.getLogger(__name__)

# Prefix comes from ADMIN_ROUTE so the console URL is not guessable
router = APIRouter(prefix=f"/{settings.admin_route}", tags=["Admin Console"], include_in_schema=False)
templates = Jinja2Templates(directory=TEMPLATE_DIR)

NAV_ITEMS = [
    ("Dashboard", "dashboard"),
    ("Assets", "assets"),
    ("Courses", "courses"),
    ("Batches", "batches"),
    ("Faculty", "faculty"),
    ("Notifications", "notifications"),
    ("Videos", "videos"),
]
PAGES = {href for _, href in NAV_ITEMS}


def _page_url(page: str) -> str:
    return f"/{settings.admin_route}/{page}"


def _context(**extra) -> dict:
    return {
        "api_url": settings.api_url,
        "admin_route": settings.admin_route,
        "nav": NAV_ITEMS,
        **extra,
    }


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, db: Session = Depends(get_db)):
    if current_admin(request, db) is not None:
        return RedirectResponse(url=_page_url("dashboard"), status_code=302)
    return templates.TemplateResponse(request, "admin/login.html", _context())


@router.get("", response_class=HTMLResponse)
@router.get("/", response_class=HTMLResponse)
def console_root():
    return RedirectResponse(url=_page_url("dashboard"), status_code=302)


@router.get("/{page}", response_class=HTMLResponse)
def console_page(page: str, request: Request, db: Session = Depends(get_db)):
    if page not in PAGES:
        raise HTTPException(status_code=404, detail="Page not found")

    admin = current_admin(request, db)
    if admin is None:
        return RedirectResponse(url=_page_url("login"), status_code=302)

    return templates.TemplateResponse(request, f"admin/{page}.html", _context(admin=admin, active=page))
