"""Error taxonomy shared by the stores, the session layer and the routes."""


class StatusboardError(Exception):
    """Base class for all application errors."""


class DuplicateKey(StatusboardError):
    """A unique key (username, service name) is already taken."""


class ConnectionFailure(StatusboardError):
    """The backing store could not be reached."""


class AuthFailure(StatusboardError):
    """Credentials did not match a stored user."""


class AdminRequired(StatusboardError):
    """The request carries a session without the admin role."""


class LoginRequired(StatusboardError):
    """The request carries no valid session."""
