from datetime import datetime, timedelta
import hashlib
import hmac

import jwt

ALGORITHM = "HS256"


class InvalidPasswordError(ValueError):
    pass


def HashPassword(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _SigningKey(password: str) -> str:
    return HashPassword(password)


def VerifyPassword(candidate: str, password: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), password.encode("utf-8"))


def CreateAccessToken(password: str, now: datetime, ttl_hours: int) -> str:
    expires = now + timedelta(hours=ttl_hours)
    payload = {
        "exp": int(expires.timestamp()),
        "pwd_hash": HashPassword(password),
    }
    return jwt.encode(payload, _SigningKey(password), algorithm=ALGORITHM)


def IsAccessTokenValid(token: str, password: str) -> bool:
    """Check signature, expiry, and that the token was issued for the current password."""
    try:
        payload = jwt.decode(token, _SigningKey(password), algorithms=[ALGORITHM])
    except jwt.InvalidTokenError:
        return False
    claimed = payload.get("pwd_hash")
    if not isinstance(claimed, str):
        return False
    return hmac.compare_digest(claimed, HashPassword(password))


def SignIn(candidate: str, password: str | None, now: datetime, ttl_hours: int) -> str:
    if not password:
        return ""
    if not VerifyPassword(candidate, password):
        raise InvalidPasswordError("Invalid password")
    return CreateAccessToken(password, now, ttl_hours)
