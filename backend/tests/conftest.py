import os

os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("TODO_WEBDIR", os.path.join(os.path.dirname(__file__), "no-web-dir"))

import pytest
from fastapi.testclient import TestClient

from scheduler import db as db_module


@pytest.fixture
def db_session():
    db_module.ConfigureEngine("sqlite://")
    db_module.InitDb()
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        db_module.Base.metadata.drop_all(bind=db_module.engine)


@pytest.fixture
def client(db_session, monkeypatch):
    monkeypatch.delenv("TODO_PASSWORD", raising=False)
    from scheduler.main import app

    with TestClient(app) as test_client:
        yield test_client
