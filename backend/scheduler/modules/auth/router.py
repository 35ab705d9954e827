import logging

from fastapi import APIRouter, HTTPException, Response, status

from scheduler.core.config import Settings
from scheduler.modules.auth.deps import TOKEN_COOKIE, NowUtc
from scheduler.modules.auth.schemas import SignInRequest, SignInResponse
from scheduler.modules.auth.service import InvalidPasswordError, SignIn

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger("auth")


@router.post("/signin", response_model=SignInResponse)
def SignInUser(payload: SignInRequest, response: Response) -> SignInResponse:
    password = Settings.Password
    if not password:
        logger.warning("TODO_PASSWORD not set, authentication is disabled")

    ttl_hours = Settings.TokenTtlHours
    try:
        token = SignIn(payload.password, password, NowUtc(), ttl_hours)
    except InvalidPasswordError as exc:
        logger.info("signin rejected: wrong password")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    if token:
        response.set_cookie(
            TOKEN_COOKIE,
            token,
            max_age=ttl_hours * 3600,
            httponly=True,
            samesite="lax",
            path="/",
        )
    return SignInResponse(token=token)
