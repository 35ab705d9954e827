import logging
import os
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from scheduler.core.config import Settings
from scheduler.core.logging import setup_logging
from scheduler.db import InitDb
from scheduler.modules.auth.router import router as auth_router
from scheduler.modules.core.router import router as core_router
from scheduler.modules.nextdate.router import router as nextdate_router
from scheduler.modules.tasks.router import router as tasks_router

setup_logging()

logger = logging.getLogger("app.request")
startup_logger = logging.getLogger("app.startup")


@asynccontextmanager
async def lifespan(_: FastAPI):
    InitDb()
    startup_logger.info("startup complete")
    yield


app = FastAPI(title="Scheduler API", lifespan=lifespan)

origin_list = Settings.AllowedOrigins
if origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logger(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)

    parts = [f"{request.method} {request.url.path}"]
    if request.url.query:
        parts.append(f"query={request.url.query}")

    status_code = response.status_code
    if status_code >= 400:
        if status_code == 404:
            parts.append("ERROR: endpoint not found")
        elif status_code >= 500:
            parts.append("ERROR: server error")
        else:
            parts.append("ERROR: client error")

    parts.append(f"status={status_code}")
    parts.append(f"{duration_ms}ms")

    log_msg = " | ".join(parts)
    if status_code >= 500:
        logger.error(log_msg)
    elif status_code >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-Id"] = request_id
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("request validation failed: %s", exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid JSON format"})


app.include_router(core_router)
app.include_router(auth_router)
app.include_router(nextdate_router)
app.include_router(tasks_router)

web_dir = Settings.WebDir
if os.path.isdir(web_dir):
    app.mount("/", StaticFiles(directory=web_dir, html=True), name="web")


def Run() -> None:
    import uvicorn

    port = Settings.Port
    startup_logger.info("starting server on :%s", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)
