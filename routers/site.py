import logging
from typing import Iterator, Mapping, MutableMapping, Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from config import TEMPLATE_DIR, get_settings
from database import get_session_factory
from routers.public import load_home_data, empty_home_data
from widgets.carousel import CardCarousel, AUTO_PLAY_INTERVAL_MS
from widgets.popup import PopupModal, mark_seen, ENTRANCE_DELAY_MS, ROTATION_INTERVAL_MS
from widgets.timers import TimerQueue

router = APIRouter(tags=["Website"])
templates = Jinja2Templates(directory=TEMPLATE_DIR)
logger = logging.getLogger(__name__)
settings = get_settings()


class SessionCookieStorage(MutableMapping):
    """Browser-session storage backed by cookies without an expiry."""

    def __init__(self, cookies: Mapping[str, str], response: Optional[Response] = None):
        self._values = dict(cookies)
        self._response = response

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._values[key] = value
        if self._response is not None:
            self._response.set_cookie(key, value, path="/", samesite="lax")

    def __delitem__(self, key: str) -> None:
        del self._values[key]
        if self._response is not None:
            self._response.delete_cookie(key, path="/", samesite="lax")

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


# ===============================
#  LANDING PAGE
# ===============================
@router.get("/", response_class=HTMLResponse)
async def home_page(request: Request, session_factory=Depends(get_session_factory)):
    try:
        data = await load_home_data(session_factory)
    except Exception:
        # Page still renders, just with empty sections
        logger.exception("Homepage data unavailable")
        data = empty_home_data()

    popup = PopupModal(data["notifications"], SessionCookieStorage(request.cookies), TimerQueue())
    show_popup = popup.mount()

    banners = CardCarousel(data["banners"], TimerQueue())
    results = CardCarousel(data["results"], TimerQueue())

    return templates.TemplateResponse(request, "home.html", {
        "data": data,
        "popups": popup.popups if show_popup else [],
        "popup_delay_ms": ENTRANCE_DELAY_MS,
        "popup_interval_ms": ROTATION_INTERVAL_MS,
        "banner_slides": banners.neighbours(),
        "banner_index": banners.current_index,
        "result_index": results.current_index,
        "carousel_interval_ms": AUTO_PLAY_INTERVAL_MS,
        "enquiry_url": settings.enquiry_url,
        "api_url": settings.api_url,
    })


# Called by the popup's close button
@router.post("/popup/seen/{item_id}")
def popup_seen(item_id: str, request: Request, response: Response):
    mark_seen(SessionCookieStorage(request.cookies, response), item_id)
    return {"success": True}
