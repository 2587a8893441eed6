import logging
import os

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import STATIC_DIR, get_settings
from database import engine, Base
from middleware import PageVisitMiddleware, IGNORED_PREFIXES
from security import require_admin

# --- IMPORT MODELS (registers every table) ---
from models.admin import Admin  # noqa: F401
from models.analytics import PageVisit  # noqa: F401
from models.assets import Asset  # noqa: F401
from models.courses import Course, Batch  # noqa: F401
from models.faculty import Faculty  # noqa: F401
from models.notifications import Notification  # noqa: F401
from models.videos import Video  # noqa: F401

# --- IMPORT ROUTERS (APIs + pages) ---
from routers import auth, assets, courses, batches, faculty, notifications, videos, stats, public, site, console

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("institute")

# --- CREATE DATABASE TABLES ---
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name)


# ==========================================
# ERROR SHAPE: { "message": "..." }
# ==========================================
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    fields = [f for f in fields if f]
    message = "Invalid request" + (f": {', '.join(fields)}" if fields else "")
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ==========================================
# MIDDLEWARE
# ==========================================
app.add_middleware(
    PageVisitMiddleware,
    ignored_prefixes=IGNORED_PREFIXES + (f"/{settings.admin_route}", "/popup", "/healthz"),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- STATIC FILES (uploaded media + site stylesheet) ---
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# --- REGISTER ROUTERS ---
admin_deps = [Depends(require_admin)]

app.include_router(auth.router)
app.include_router(stats.router, dependencies=admin_deps)
app.include_router(assets.router, dependencies=admin_deps)
app.include_router(courses.router, dependencies=admin_deps)
app.include_router(batches.router, dependencies=admin_deps)
app.include_router(faculty.router, dependencies=admin_deps)
app.include_router(notifications.router, dependencies=admin_deps)
app.include_router(videos.router, dependencies=admin_deps)
app.include_router(public.router)
app.include_router(console.router)
app.include_router(site.router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}
