from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from tagerpro import models  # noqa: F401
from tagerpro.api.deps import get_db, get_llm_client
from tagerpro.main import app
from tagerpro.tests.fakes import FakeLLMClient, reset_sse_app_status


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture(name="llm")
def llm_fixture() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture(name="client")
def client_fixture(engine, llm) -> Generator[TestClient, None, None]:
    def get_db_override() -> Generator[Session, None, None]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = get_db_override
    app.dependency_overrides[get_llm_client] = lambda: llm
    reset_sse_app_status()
    yield TestClient(app)
    app.dependency_overrides.clear()
