import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from statusboard.api.deps import (
    get_credential_store,
    get_session_authority,
    get_session_token,
    get_settings,
)
from statusboard.auth import sign_session_id
from statusboard.config import Settings
from statusboard.errors import AuthFailure
from statusboard.services.credential_store import CredentialStore
from statusboard.services.login import authenticate
from statusboard.services.sessions import SessionAuthority
from statusboard.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/login", response_class=HTMLResponse)
async def login_form(request: Request):
    return templates.TemplateResponse(request, "login.html")


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    store: CredentialStore = Depends(get_credential_store),
    sessions: SessionAuthority = Depends(get_session_authority),
    previous_token: str | None = Depends(get_session_token),
    settings: Settings = Depends(get_settings),
):
    try:
        user = authenticate(store, username, password, rounds=settings.bcrypt_rounds)
    except AuthFailure:
        return templates.TemplateResponse(
            request,
            "message.html",
            {"message": "Login Failed.", "back": True},
            status_code=401,
        )

    sessions.destroy(previous_token)
    token = sessions.create(user.id, user.username, user.role)
    target = "/admin" if user.role == "admin" else "/staff"
    response = RedirectResponse(target, status_code=303)
    response.set_cookie(
        settings.session_cookie_name,
        sign_session_id(token, settings.secret_key),
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response


@router.get("/logout")
async def logout(
    token: str | None = Depends(get_session_token),
    sessions: SessionAuthority = Depends(get_session_authority),
    settings: Settings = Depends(get_settings),
):
    login = sessions.resolve(token)
    sessions.destroy(token)
    if login:
        logger.info(f"User {login.username} logged out")
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(settings.session_cookie_name)
    return response
