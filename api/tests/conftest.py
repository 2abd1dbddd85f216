"""Common pytest fixtures for API tests.

Tests run against an in-memory SQLite database. DATABASE_URL must be set
before the app (and its engine) is imported.
"""

import os
from collections.abc import Iterator

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete
from sqlmodel import Session, SQLModel

from recloser_api.catalog import SqlCatalogStore
from recloser_api.db import create_db_and_tables, engine
from recloser_api.main import app
from recloser_api.seed import seed_reference_data


@pytest.fixture(scope="session", autouse=True)
def _schema() -> None:
    create_db_and_tables()


@pytest.fixture(scope="session")
def client(_schema) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_db(_schema) -> Iterator[None]:
    # Children first so foreign keys hold, then restore reference rows
    with Session(engine) as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            session.exec(delete(table))
        session.commit()
        seed_reference_data(session)
    yield


@pytest.fixture
def session() -> Iterator[Session]:
    with Session(engine) as s:
        yield s


@pytest.fixture
def store(session: Session) -> SqlCatalogStore:
    return SqlCatalogStore(session)
