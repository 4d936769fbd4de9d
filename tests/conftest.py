"""Shared fixtures: every test gets a freshly created and seeded in-memory database."""
import os

# Must be set before src.db.database builds its engine
os.environ["DB_URL"] = "sqlite://"
os.environ["SEED_DATABASE"] = "true"

import pytest
from fastapi.testclient import TestClient

from src.api.app import app
from src.db.database import SessionLocal, drop_tables


@pytest.fixture
def client():
    drop_tables()
    # Entering the client runs the lifespan, which creates and seeds the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
