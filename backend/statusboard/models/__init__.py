from statusboard.models.status import Status
from statusboard.models.user import ROLES, User

__all__ = [
    "ROLES",
    "Status",
    "User",
]
