from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from statusboard.api.deps import get_settings, get_status_store
from statusboard.config import Settings
from statusboard.services.status_store import StatusStore, merge_with_defaults
from statusboard.templating import templates

router = APIRouter(tags=["public"])


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    store: StatusStore = Depends(get_status_store),
    settings: Settings = Depends(get_settings),
):
    board = merge_with_defaults(
        store.find_all(), settings.known_services, settings.queueless_services
    )
    return templates.TemplateResponse(request, "index.html", {"board": board})
