import logging

from statusboard.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def seed_admin(store: CredentialStore, username: str, password: str) -> bool:
    """Create the root admin account unless it already exists.

    Returns True when a new account was created.
    """
    if store.find_by_username(username):
        logger.info(f"Admin account {username} already present")
        return False
    store.create(username, password, role="admin")
    logger.info(f"Root admin created: {username}")
    return True
