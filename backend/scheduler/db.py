import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from scheduler.core.config import Settings

Base = declarative_base()
engine = None
SessionLocal = None

logger = logging.getLogger("app.db")


def BuildConnectionUrl(db_file: str | None = None) -> str:
    path = db_file or Settings.DbFile
    if path == ":memory:":
        return "sqlite://"
    return f"sqlite:///{os.path.abspath(path)}"


def ConfigureEngine(url: str | None = None):
    global engine, SessionLocal
    url = url or BuildConnectionUrl()
    options = {"connect_args": {"check_same_thread": False}}
    if url == "sqlite://":
        # A single shared connection, otherwise every session sees an empty database.
        options["poolclass"] = StaticPool
    else:
        db_dir = os.path.dirname(url.removeprefix("sqlite:///"))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
    engine = create_engine(url, **options)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return engine


def InitDb() -> None:
    # Model modules register their tables on Base when imported.
    from scheduler.modules.tasks import models  # noqa: F401

    if engine is None:
        ConfigureEngine()
    logger.info("ensuring schema at %s", engine.url)
    Base.metadata.create_all(bind=engine)


def GetDb():
    if SessionLocal is None:
        ConfigureEngine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
