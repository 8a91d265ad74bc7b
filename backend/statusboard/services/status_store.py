import logging
from collections.abc import Iterable, Sequence
from datetime import timedelta
from typing import Protocol

from sqlmodel import Session, select

from statusboard.errors import DuplicateKey
from statusboard.models.status import Status, as_utc, utcnow
from statusboard.services.sql_errors import translate_store_errors

logger = logging.getLogger(__name__)

DEFAULT_STATE = "Offline"
DEFAULT_QUEUE_STATE = "N/A"


def status_with_defaults(name: str, queueless: Iterable[str] = ()) -> Status:
    """Unsaved placeholder shown for a known service that has no record yet."""
    return Status(
        service_name=name,
        state=DEFAULT_STATE,
        queue_state=None if name in set(queueless) else DEFAULT_QUEUE_STATE,
        note="",
    )


def merge_with_defaults(
    statuses: Iterable[Status],
    known_services: Iterable[str],
    queueless: Iterable[str] = (),
) -> dict[str, Status]:
    """Known services first (defaults where unseen), then any other stored service."""
    queueless = set(queueless)
    board = {name: status_with_defaults(name, queueless) for name in known_services}
    for status in statuses:
        board[status.service_name] = status
    return board


class StatusStore(Protocol):
    def find_all(self) -> Sequence[Status]: ...

    def find_by_name(self, service_name: str) -> Status | None: ...

    def upsert(
        self,
        service_name: str,
        state: str,
        queue_state: str | None = None,
        note: str = "",
    ) -> Status: ...


class SqlStatusStore:
    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> Sequence[Status]:
        with translate_store_errors(self.session):
            return self.session.exec(select(Status).order_by(Status.id)).all()

    def find_by_name(self, service_name: str) -> Status | None:
        with translate_store_errors(self.session):
            return self.session.exec(
                select(Status).where(Status.service_name == service_name)
            ).first()

    def upsert(
        self,
        service_name: str,
        state: str,
        queue_state: str | None = None,
        note: str = "",
    ) -> Status:
        """Update the record for ``service_name`` or create it.

        An empty ``queue_state`` leaves the stored value untouched. The
        timestamp always moves forward, even when the clock does not.
        """
        status = self.find_by_name(service_name)
        if status is None:
            status = Status(service_name=service_name)
            try:
                return self._save(status, state, queue_state, note)
            except DuplicateKey:
                # a concurrent request created it first; overwrite theirs
                status = self.find_by_name(service_name)
                if status is None:
                    raise
        return self._save(status, state, queue_state, note)

    def _save(
        self, status: Status, state: str, queue_state: str | None, note: str
    ) -> Status:
        now = utcnow()
        if status.id is not None:
            previous = as_utc(status.updated_at)
            if now <= previous:
                now = previous + timedelta(microseconds=1)

        status.state = state
        status.note = note
        if queue_state:
            status.queue_state = queue_state
        status.updated_at = now

        with translate_store_errors(self.session):
            self.session.add(status)
            self.session.commit()
            self.session.refresh(status)
        logger.info(f"Status of {status.service_name} set to {state}")
        return status
