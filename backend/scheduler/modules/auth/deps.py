from datetime import datetime, timezone

from fastapi import HTTPException, Request, status

from scheduler.core.config import Settings
from scheduler.modules.auth.service import IsAccessTokenValid

TOKEN_COOKIE = "token"


def NowUtc() -> datetime:
    return datetime.now(tz=timezone.utc)


def _ExtractToken(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.replace("Bearer ", "", 1).strip()
    return request.cookies.get(TOKEN_COOKIE, "")


def RequireAuthenticated(request: Request) -> None:
    password = Settings.Password
    if not password:
        return

    token = _ExtractToken(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    if not IsAccessTokenValid(token, password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
