# (c) Copyright Datacraft, 2026
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from iamkit.core import orm  # noqa: F401  registers every table
from iamkit.core.db.base import Base
from iamkit.core.features.organizations.db.api import create_organization
from iamkit.core.tenancy.context import create_tenant_context


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def unit(db_session):
    """Root unit of a fresh organization."""
    _, unit = await create_organization(db_session, "Acme")
    await db_session.commit()
    return unit


@pytest_asyncio.fixture
async def other_unit(db_session):
    _, unit = await create_organization(db_session, "Globex")
    await db_session.commit()
    return unit


@pytest_asyncio.fixture
async def tenant(unit):
    return create_tenant_context(unit)
