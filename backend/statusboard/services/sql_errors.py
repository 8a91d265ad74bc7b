from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlmodel import Session

from statusboard.errors import ConnectionFailure, DuplicateKey


@contextmanager
def translate_store_errors(session: Session) -> Iterator[None]:
    """Map SQLAlchemy failures onto the application error taxonomy."""
    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        raise DuplicateKey(str(exc.orig)) from exc
    except (OperationalError, InterfaceError) as exc:
        session.rollback()
        raise ConnectionFailure(str(exc.orig)) from exc
