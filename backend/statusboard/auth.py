import bcrypt
from jose import JWTError, jwt

from statusboard.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # malformed stored hash
        return False


def sign_session_id(session_id: str, secret_key: str) -> str:
    return jwt.encode({"sid": session_id}, secret_key, algorithm="HS256")


def read_session_id(cookie: str, secret_key: str) -> str | None:
    """Return the session id carried by a signed cookie, or None if it was tampered with."""
    try:
        payload = jwt.decode(cookie, secret_key, algorithms=["HS256"])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None
