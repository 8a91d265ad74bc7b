from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from statusboard.api.deps import get_settings, get_status_store, require_authenticated
from statusboard.config import Settings
from statusboard.services.sessions import SessionData
from statusboard.services.status_store import StatusStore
from statusboard.templating import templates

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("", response_class=HTMLResponse)
async def staff_page(
    request: Request,
    store: StatusStore = Depends(get_status_store),
    settings: Settings = Depends(get_settings),
    login: SessionData = Depends(require_authenticated),
):
    statuses = {status.service_name: status for status in store.find_all()}
    return templates.TemplateResponse(
        request,
        "staff.html",
        {
            "statuses": statuses,
            "user": login,
            "known_services": settings.known_services,
        },
    )


@router.post("/update")
async def update_status(
    service: str = Form(..., min_length=1),
    state: str = Form(""),
    queue_state: str = Form("", alias="queueState"),
    note: str = Form(""),
    store: StatusStore = Depends(get_status_store),
    _login: SessionData = Depends(require_authenticated),
):
    store.upsert(service, state, queue_state or None, note)
    return RedirectResponse("/staff", status_code=303)
