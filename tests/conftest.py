"""Shared fixtures: a throwaway SQLite database per test and an in-memory object store."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from app import domain  # noqa: F401  (registers models on Base.metadata)
from app.core.config import settings
from app.core.exceptions import StorageError
from app.db.base import Base, build_engine, get_db
from app.main import create_app
from app.services.storage import ObjectStorage, get_storage


class FakeStorage(ObjectStorage):
    """Keeps uploaded objects in a dict; ``fail=True`` simulates a rejected transfer."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def put_object(self, key: str, content: bytes, content_type: str) -> str:
        if self.fail:
            raise StorageError("Failed to upload file")
        self.objects[key] = (content, content_type)
        return f"https://bucket.test.local/{key}"


@pytest.fixture(autouse=True)
def _offline_settings(monkeypatch):
    # Never reach OpenAI from tests, regardless of the developer's .env
    monkeypatch.setattr(settings, "openai_api_key", None)


@pytest.fixture
def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool, echo=False)

    async def _create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_schema())
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def run_db(session_factory):
    """Run ``await fn(session)`` against the test database and commit."""

    def _run(fn):
        async def _inner():
            async with session_factory() as session:
                result = await fn(session)
                await session.commit()
                return result

        return asyncio.run(_inner())

    return _run


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def app(session_factory, storage):
    application = create_app()

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = _override_get_db
    application.dependency_overrides[get_storage] = lambda: storage
    return application


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def application_payload(**overrides) -> dict:
    payload = {
        "legalEntityName": "Acme Industrial Supply LLC",
        "dba": "Acme Supply",
        "taxEIN": "12-3456789",
        "dunsNumber": "123456789",
        "phoneNo": "(713) 555-0100",
        "billToAddress": "100 Industrial Blvd Suite 200",
        "billToCityStateZip": "Houston, TX 77002",
        "shipToAddress": "100 Industrial Blvd Suite 200",
        "shipToCityStateZip": "Houston, TX 77002",
        "buyerNameEmail": "jane@acmesupply.com",
        "accountsPayableNameEmail": "ap@acmesupply.com",
        "wantInvoicesEmailed": True,
        "invoiceEmail": "invoices@acmesupply.com",
        "tradeReferences": [
            {"name": "Gulf Coast Metals", "email": "ar@gulfmetals.com"},
            {"name": "Lone Star Fasteners"},
            {"name": "Bayou Packaging"},
        ],
        "termsAgreed": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_application(client):
    def _create(**overrides) -> dict:
        response = client.post("/api/applications", json=application_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
