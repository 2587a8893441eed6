"""Best-effort page-visit logging."""

import asyncio
import logging
from typing import Callable, Iterable, Optional, Set

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from database import SessionLocal
from models.analytics import PageVisit

logger = logging.getLogger(__name__)

IGNORED_PREFIXES = ("/admin", "/auth", "/favicon.ico", "/assets", "/uploads", "/static")

# Detached tasks are referenced here until they finish
_pending: Set[asyncio.Task] = set()


def record_visit(path: str, ip_address: str, user_agent: str, session_factory=SessionLocal) -> None:
    db = session_factory()
    try:
        db.add(PageVisit(path=path, ip_address=ip_address, user_agent=user_agent))
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class PageVisitMiddleware(BaseHTTPMiddleware):
    """Logs public GET requests without ever delaying or failing them."""

    def __init__(self, app: ASGIApp, ignored_prefixes: Iterable[str] = IGNORED_PREFIXES,
                 recorder: Optional[Callable[[str, str, str], None]] = None):
        super().__init__(app)
        self.ignored_prefixes = tuple(ignored_prefixes)
        self.recorder = recorder or record_visit

    def should_log(self, request: Request) -> bool:
        if request.method != "GET":
            return False
        path = request.url.path
        return not any(path.startswith(prefix) for prefix in self.ignored_prefixes)

    async def _record(self, path: str, ip_address: str, user_agent: str) -> None:
        try:
            await run_in_threadpool(self.recorder, path, ip_address, user_agent)
        except Exception as e:
            logger.warning("PageVisit error: %s", e)

    async def dispatch(self, request: Request, call_next):
        try:
            if self.should_log(request):
                task = asyncio.create_task(
                    self._record(
                        request.url.path,
                        client_ip(request),
                        request.headers.get("user-agent") or "unknown",
                    )
                )
                _pending.add(task)
                task.add_done_callback(_pending.discard)
        except Exception as e:
            logger.warning("PageVisit scheduling failed: %s", e)

        return await call_next(request)
