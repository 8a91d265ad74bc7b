from fastapi import Depends, Request
from sqlmodel import Session

from statusboard.auth import read_session_id
from statusboard.config import Settings
from statusboard.database import get_session
from statusboard.errors import AdminRequired, LoginRequired
from statusboard.services.credential_store import SqlCredentialStore
from statusboard.services.sessions import SessionAuthority, SessionData
from statusboard.services.status_store import SqlStatusStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_authority(request: Request) -> SessionAuthority:
    return request.app.state.sessions


def get_credential_store(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> SqlCredentialStore:
    return SqlCredentialStore(
        session,
        protected_username=settings.admin_username,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_status_store(session: Session = Depends(get_session)) -> SqlStatusStore:
    return SqlStatusStore(session)


def get_session_token(
    request: Request, settings: Settings = Depends(get_settings)
) -> str | None:
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        return None
    return read_session_id(cookie, settings.secret_key)


def get_login(
    token: str | None = Depends(get_session_token),
    sessions: SessionAuthority = Depends(get_session_authority),
) -> SessionData | None:
    return sessions.resolve(token)


async def require_authenticated(
    login: SessionData | None = Depends(get_login),
) -> SessionData:
    if login is None:
        raise LoginRequired()
    return login


async def require_admin(
    login: SessionData | None = Depends(get_login),
) -> SessionData:
    if login is None or not login.is_admin:
        raise AdminRequired()
    return login
