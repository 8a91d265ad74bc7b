import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from statusboard.api.admin import router as admin_router
from statusboard.api.auth import router as auth_router
from statusboard.api.public import router as public_router
from statusboard.api.staff import router as staff_router
from statusboard.config import Settings, settings as default_settings
from statusboard.database import build_engine, init_db
from statusboard.errors import AdminRequired, ConnectionFailure, LoginRequired
from statusboard.logging_config import setup_logging
from statusboard.services.credential_store import SqlCredentialStore
from statusboard.services.seed import seed_admin
from statusboard.services.sessions import SessionAuthority

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    try:
        init_db(app.state.engine)
        with Session(app.state.engine) as session:
            store = SqlCredentialStore(
                session,
                protected_username=settings.admin_username,
                bcrypt_rounds=settings.bcrypt_rounds,
            )
            seed_admin(store, settings.admin_username, settings.admin_password)
    except (ConnectionFailure, SQLAlchemyError):
        # keep serving; requests will report the failure individually
        logger.exception("Database unavailable at startup")
    yield
    app.state.engine.dispose()


def create_app(settings: Settings = default_settings) -> FastAPI:
    setup_logging(settings.log_level)
    if settings.secret_key == "change-me-in-production":
        logger.warning("Using the default secret key; set STATUSBOARD_SECRET_KEY")

    app = FastAPI(title="Statusboard", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.sessions = SessionAuthority(
        max_age=timedelta(minutes=settings.session_max_age_minutes)
    )

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse("/login", status_code=303)

    @app.exception_handler(AdminRequired)
    async def admin_required_handler(request: Request, exc: AdminRequired):
        return HTMLResponse(
            'Admin Access Required. <a href="/login">Login as Admin</a>',
            status_code=403,
        )

    @app.exception_handler(ConnectionFailure)
    async def connection_failure_handler(request: Request, exc: ConnectionFailure):
        logger.error(f"Store unavailable during {request.method} {request.url.path}: {exc}")
        return HTMLResponse("Internal Server Error", status_code=500)

    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(staff_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
