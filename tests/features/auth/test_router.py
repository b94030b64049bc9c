# (c) Copyright Datacraft, 2026
"""HTTP-level tests: login, role assumption and error mapping."""
import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from iamkit.app import app
from iamkit.core import orm  # noqa: F401
from iamkit.core.db.base import Base
from iamkit.core.db.engine import get_db
from iamkit.core.features.groups.db.api import create_group
from iamkit.core.features.organizations.db.api import create_organization
from iamkit.core.features.policies.db.api import create_policy
from iamkit.core.features.roles.db.api import create_role
from iamkit.core.features.users.db.api import create_user


async def seed(engine) -> dict:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        _, home = await create_organization(session, "Acme")
        _, away = await create_organization(session, "Globex")
        list_groups = await create_policy(session, home.id, "list", "Allow", ["Group:ListGroups"])
        deny_get = await create_policy(session, home.id, "no-get", "Deny", ["Group:GetGroup"])
        home_group = await create_group(session, "Home", home.id)
        away_group = await create_group(session, "Away", away.id)
        away_read = await create_policy(
            session, away.id, "away-read", "Allow",
            ["Group:ListGroups", "Group:GetGroup"], resources=[away_group.id],
        )
        list_roles = await create_policy(session, away.id, "list-roles", "Allow", ["Role:ListRoles"])
        visitor = await create_role(session, "Visitor", away.id, policy_ids=[away_read.id, list_roles.id])
        stranger = await create_role(session, "Stranger", away.id)
        member = await create_role(session, "Member", home.id)
        await create_user(
            session, "a@example.com", "secret", home.id,
            policy_ids=[list_groups.id, deny_get.id], role_ids=[visitor.id],
        )
        await session.commit()
        return {
            "home_group": home_group.id,
            "away_group": away_group.id,
            "visitor": visitor.id,
            "stranger": stranger.id,
            "member": member.id,
        }


@pytest.fixture
def client(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'iam.db'}", poolclass=NullPool)
    ids = asyncio.run(seed(engine))
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        test_client.ids = ids
        yield test_client
    app.dependency_overrides.clear()


def login(client, email="a@example.com", password="secret") -> dict:
    response = client.post("/auth/token", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_login_rejects_bad_password(client):
    response = client.post("/auth/token", data={"username": "a@example.com", "password": "nope"})

    assert response.status_code == 401


def test_requests_without_token(client):
    assert client.get("/groups").status_code == 401
    response = client.get("/groups", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_list_and_get_groups(client):
    headers = login(client)

    listed = client.get("/groups", headers=headers)
    denied = client.get(f"/groups/{client.ids['home_group']}", headers=headers)

    assert [g["id"] for g in listed.json()] == [client.ids["home_group"]]
    assert denied.status_code == 404


def test_create_denied_message(client):
    response = client.post("/groups", json={"name": "New"}, headers=login(client))

    assert response.status_code == 403
    assert response.json() == {"detail": 'Cannot execute "CreateGroup" on "Group"'}


def test_assume_role(client):
    headers = login(client)

    response = client.post(f"/auth/assume/{client.ids['visitor']}", headers=headers)
    assert response.status_code == 200
    assumed = {"Authorization": f"Bearer {response.json()['access_token']}"}

    me = client.get("/auth/me", headers=assumed).json()
    listed = client.get("/groups", headers=assumed).json()
    fetched = client.get(f"/groups/{client.ids['away_group']}", headers=assumed)

    assert me["assumed_role_id"] == client.ids["visitor"]
    assert [g["id"] for g in listed] == [client.ids["away_group"]]
    assert fetched.status_code == 200


def test_assume_unassigned_role(client):
    response = client.post(f"/auth/assume/{client.ids['stranger']}", headers=login(client))

    assert response.status_code == 403
    assert response.json() == {"detail": "You can't assume that role"}


def test_evaluate(client):
    response = client.post(
        "/policies/evaluate",
        json={"action": "Group:GetGroup", "resource_type": "Group", "resource": {"id": "x"}},
        headers=login(client),
    )

    assert response.status_code == 200
    assert response.json()["reason"] == "Resource is outside the active tenant"


def test_role_statements_apply_in_home_unit(client):
    response = client.get("/roles", headers=login(client))

    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [client.ids["member"]]


def test_role_grant_does_not_reach_home_group(client):
    headers = login(client)

    away = client.get(f"/groups/{client.ids['away_group']}", headers=headers)
    home = client.get(f"/groups/{client.ids['home_group']}", headers=headers)

    assert away.status_code == 404
    assert home.status_code == 404
