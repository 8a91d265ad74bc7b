from datetime import datetime

from sqlmodel import Field, SQLModel

from statusboard.models.status import utcnow

ROLES = ("staff", "admin")


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str
    role: str = Field(default="staff")  # "staff" | "admin"
    created_at: datetime = Field(default_factory=utcnow)
