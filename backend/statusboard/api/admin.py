from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from statusboard.api.deps import get_credential_store, get_settings, require_admin
from statusboard.config import Settings
from statusboard.errors import DuplicateKey
from statusboard.services.credential_store import CredentialStore
from statusboard.services.sessions import SessionData
from statusboard.templating import templates

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("", response_class=HTMLResponse)
async def admin_page(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
    login: SessionData = Depends(require_admin),
):
    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "users": store.list_all(),
            "user": login,
            "protected": settings.admin_username,
        },
    )


@router.post("/create")
async def create_user(
    request: Request,
    username: str = Form(..., min_length=1),
    password: str = Form(..., min_length=1),
    role: str = Form("staff"),
    store: CredentialStore = Depends(get_credential_store),
    _login: SessionData = Depends(require_admin),
):
    try:
        store.create(username, password, role)
    except DuplicateKey:
        return templates.TemplateResponse(
            request,
            "message.html",
            {"message": "Error: User might already exist.", "link": "/admin"},
            status_code=409,
        )
    except ValueError:
        return templates.TemplateResponse(
            request,
            "message.html",
            {"message": "Error: Unknown role.", "link": "/admin"},
            status_code=400,
        )
    return RedirectResponse("/admin", status_code=303)


@router.post("/delete")
async def delete_user(
    user_id: int = Form(..., alias="userId"),
    store: CredentialStore = Depends(get_credential_store),
    _login: SessionData = Depends(require_admin),
):
    store.delete(user_id)
    return RedirectResponse("/admin", status_code=303)
