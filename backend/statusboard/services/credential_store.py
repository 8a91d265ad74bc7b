import logging
from collections.abc import Sequence
from typing import Protocol

from sqlmodel import Session, select

from statusboard.auth import hash_password
from statusboard.errors import DuplicateKey
from statusboard.models.user import ROLES, User
from statusboard.services.sql_errors import translate_store_errors

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    def find_by_username(self, username: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def create(self, username: str, password: str, role: str = "staff") -> User: ...

    def delete(self, user_id: int) -> bool: ...

    def list_all(self) -> Sequence[User]: ...


class SqlCredentialStore:
    """User records kept in the ``users`` table.

    The account named ``protected_username`` can never be deleted through
    this store; ``delete`` silently refuses it.
    """

    def __init__(
        self,
        session: Session,
        protected_username: str = "admin",
        bcrypt_rounds: int | None = None,
    ):
        self.session = session
        self.protected_username = protected_username
        self.bcrypt_rounds = bcrypt_rounds

    def find_by_username(self, username: str) -> User | None:
        with translate_store_errors(self.session):
            return self.session.exec(
                select(User).where(User.username == username)
            ).first()

    def find_by_id(self, user_id: int) -> User | None:
        with translate_store_errors(self.session):
            return self.session.get(User, user_id)

    def create(self, username: str, password: str, role: str = "staff") -> User:
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")
        if self.find_by_username(username):
            logger.warning(f"Username {username} already exists")
            raise DuplicateKey(f"Username already exists: {username}")

        user = User(
            username=username,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            role=role,
        )
        with translate_store_errors(self.session):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        logger.info(f"Created user {username} with role {role}")
        return user

    def delete(self, user_id: int) -> bool:
        user = self.find_by_id(user_id)
        if not user:
            return False
        if user.username == self.protected_username:
            logger.warning(f"Refusing to delete protected account {user.username}")
            return False
        with translate_store_errors(self.session):
            self.session.delete(user)
            self.session.commit()
        logger.info(f"Deleted user {user.username}")
        return True

    def list_all(self) -> Sequence[User]:
        with translate_store_errors(self.session):
            return self.session.exec(select(User).order_by(User.id)).all()
