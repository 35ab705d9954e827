import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from scheduler.modules.auth.deps import NowUtc
from scheduler.modules.nextdate.errors import NextDateError
from scheduler.modules.nextdate.services import NextDate
from scheduler.utils.dates import ParseCompactDate

router = APIRouter(prefix="/api", tags=["nextdate"])
logger = logging.getLogger("nextdate")


@router.get("/nextdate", response_class=PlainTextResponse)
def GetNextDate(now: str = "", date: str = "", repeat: str = "") -> PlainTextResponse:
    if now:
        try:
            reference = ParseCompactDate(now)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid now parameter") from exc
    else:
        reference = NowUtc()

    try:
        result = NextDate(reference, date, repeat)
    except NextDateError as exc:
        logger.debug("nextdate rejected (%s): %s", exc.Kind.value, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PlainTextResponse(result)
