# (c) Copyright Datacraft, 2026
"""Tests for the translation of filter expressions into SQL."""
import pytest
import pytest_asyncio
from sqlalchemy import Boolean, Integer, String, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from iamkit.core.db.filters import row_fields, to_sqlalchemy
from iamkit.core.features.policies.filters import (
    FALSE, TRUE, FieldCompare, FieldEquals, FieldIn, compile_filter, evaluate_filter,
    and_, not_, or_,
)

from tests.factories import allow, deny, rules


class Base(DeclarativeBase):
    pass


class Item(Base):
    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    active: Mapped[bool | None] = mapped_column(Boolean, nullable=True)


ITEMS = [
    dict(id="a", name="Foo", level=1, active=True),
    dict(id="b", name="Bar", level=2, active=False),
    dict(id="c", name=None, level=3, active=None),
    dict(id="d", name="Foo", level=None, active=True),
    dict(id="e", name="5", level=5, active=False),
]


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        session.add_all([Item(**item) for item in ITEMS])
        await session.commit()
        yield session

    await engine.dispose()


async def select_ids(session, expr) -> list[str]:
    stmt = select(Item).where(to_sqlalchemy(expr, Item)).order_by(Item.id)
    return [item.id for item in (await session.execute(stmt)).scalars()]


async def expected_ids(session, expr) -> list[str]:
    items = (await session.execute(select(Item).order_by(Item.id))).scalars()
    return [item.id for item in items if evaluate_filter(expr, row_fields(item))]


EXPRESSIONS = [
    TRUE,
    FALSE,
    FieldEquals("name", "Foo"),
    not_(FieldEquals("name", "Foo")),
    FieldEquals("name", 5),
    FieldEquals("level", 2),
    FieldEquals("level", "2"),
    FieldEquals("active", True),
    FieldEquals("active", 1),
    not_(FieldEquals("active", True)),
    FieldEquals("missing", "x"),
    not_(FieldEquals("missing", "x")),
    FieldIn("id", frozenset({"a", "c", "z"})),
    FieldIn("id", frozenset()),
    FieldCompare("level", "lt", 3),
    FieldCompare("level", "gte", 2),
    not_(FieldCompare("level", "gt", 1)),
    FieldCompare("name", "gt", 1),
    or_(FieldEquals("name", "Bar"), not_(FieldIn("id", frozenset({"a", "b"})))),
    and_(not_(FieldEquals("name", "Foo")), not_(FieldCompare("level", "lte", 2))),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("expr", EXPRESSIONS)
async def test_sql_matches_in_memory_evaluation(session, expr):
    assert await select_ids(session, expr) == await expected_ids(session, expr)


@pytest.mark.asyncio
async def test_compiled_rule_set(session):
    rule_set = rules(
        allow("Item:ListItems"),
        deny("Item:ListItems", condition={"StringEquals": {"name": "Foo"}}),
        allow("Item:ListItems", resources=["d"]),
    )
    expr = compile_filter(rule_set, "ListItems", "Item")

    assert await select_ids(session, expr) == ["b", "c", "d", "e"]
    assert await expected_ids(session, expr) == ["b", "c", "d", "e"]


@pytest.mark.asyncio
async def test_absent_values_are_not_null_comparisons(session):
    assert await select_ids(session, not_(FieldEquals("name", "Foo"))) == ["b", "c", "e"]
    assert await select_ids(session, not_(FieldCompare("level", "lt", 3))) == ["c", "d", "e"]


@pytest.mark.asyncio
async def test_row_fields(session):
    item = (await session.execute(select(Item).where(Item.id == "a"))).scalar_one()

    assert row_fields(item) == {"id": "a", "name": "Foo", "level": 1, "active": True}
