import asyncio
import os
import sys
import uuid

import pytest
from fastapi.testclient import TestClient

# Ensure project root is importable when pytest runs from a different CWD
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Hard override: tests always run against a throwaway SQLite file
TEST_DB_PATH = os.path.join(project_root, "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["TIMEZONE"] = "UTC"


# Initialize the database schema once per test session; every test uses its own owner id
@pytest.fixture(scope="session", autouse=True)
def _init_db_once():
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    # Delay import until after the environment is configured
    from planner import database

    asyncio.run(database.init_db_async())
    yield
    asyncio.run(database.drop_db_async())
    asyncio.run(database.shutdown_db_async())
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture()
def owner_id():
    return f"user_{uuid.uuid4().hex[:8]}"


@pytest.fixture()
def client():
    from planner.main import app

    with TestClient(app) as c:
        yield c
