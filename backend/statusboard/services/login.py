import logging
from functools import lru_cache

from statusboard.auth import hash_password, verify_password
from statusboard.errors import AuthFailure
from statusboard.models.user import User
from statusboard.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int | None = None) -> str:
    return hash_password("not-a-real-password", rounds=rounds)


def authenticate(
    store: CredentialStore, username: str, password: str, rounds: int | None = None
) -> User:
    """Return the user matching the credentials or raise AuthFailure.

    Unknown users still pay for one bcrypt check so both failure paths
    look alike from the outside. ``rounds`` should match the cost the
    stored hashes were made with.
    """
    user = store.find_by_username(username)
    if user is None:
        verify_password(password, _dummy_hash(rounds))
        logger.warning(f"Failed login for {username}")
        raise AuthFailure("Invalid credentials")
    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for {username}")
        raise AuthFailure("Invalid credentials")
    logger.info(f"User {username} logged in as {user.role}")
    return user
