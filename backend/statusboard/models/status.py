from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp read back from a backend that drops tzinfo."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class Status(SQLModel, table=True):
    __tablename__ = "statuses"

    id: int | None = Field(default=None, primary_key=True)
    service_name: str = Field(unique=True, index=True)
    state: str = Field(default="Offline")
    # None only on unsaved defaults for services that have no queue
    queue_state: str | None = Field(default="N/A")
    note: str = Field(default="")
    updated_at: datetime = Field(default_factory=utcnow)
