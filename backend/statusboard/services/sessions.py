import logging
import secrets
import threading
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class SessionData(BaseModel):
    user_id: int
    username: str
    role: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SessionAuthority:
    """In-process session table keyed by opaque random tokens.

    The role is captured at login and is not re-read from the user record,
    so a later role change only takes effect on the next login.
    """

    def __init__(self, max_age: timedelta = timedelta(hours=12)):
        self.max_age = max_age
        self._sessions: dict[str, SessionData] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int, username: str, role: str) -> str:
        token = secrets.token_urlsafe(32)
        now = datetime.now(UTC)
        data = SessionData(
            user_id=user_id,
            username=username,
            role=role,
            expires_at=now + self.max_age,
        )
        with self._lock:
            self._purge_expired(now)
            self._sessions[token] = data
        return token

    def _purge_expired(self, now: datetime) -> None:
        # caller holds the lock
        expired = [t for t, d in self._sessions.items() if d.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.info(f"Purged {len(expired)} expired sessions")

    def resolve(self, token: str | None) -> SessionData | None:
        if not token:
            return None
        with self._lock:
            data = self._sessions.get(token)
            if data is None:
                return None
            if data.expires_at <= datetime.now(UTC):
                del self._sessions[token]
                logger.info(f"Session for {data.username} expired")
                return None
            return data

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
