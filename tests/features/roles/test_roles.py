# (c) Copyright Datacraft, 2026
"""Tests for roles: attaching them to users and acting as them."""
import pytest
from sqlalchemy import select

from iamkit.core.exceptions import ResourceNotFound, RoleNotAssigned
from iamkit.core.features.auth.principal import principal_from_user
from iamkit.core.features.groups.db.api import create_group
from iamkit.core.features.groups.service import GroupService
from iamkit.core.features.policies.ability import AbilityAggregator
from iamkit.core.features.policies.db.api import create_policy
from iamkit.core.features.roles import schema
from iamkit.core.features.roles.db.api import create_role
from iamkit.core.features.roles.service import RoleService
from iamkit.core.features.users.db import api as usr_dbapi
from iamkit.core.features.users.db.orm import user_roles

from tests.factories import allow, deny, principal


def ability_for(tenant, *statements):
    return AbilityAggregator().build(principal(statements=statements, tenant=tenant))


@pytest.mark.asyncio
async def test_add_role_to_user(db_session, unit, tenant, other_unit):
    role = await create_role(db_session, "Auditor", unit.id)
    user = await usr_dbapi.create_user(db_session, "a@example.com", "secret", other_unit.id)
    ability = ability_for(tenant, allow("Role:AddRoleToUser"))

    await RoleService(db_session).add_role_to_user(ability, role.id, user.id)
    await RoleService(db_session).add_role_to_user(ability, role.id, user.id)

    links = (await db_session.execute(select(user_roles.c.role_id).where(user_roles.c.user_id == user.id))).scalars().all()
    assert links == [role.id]


@pytest.mark.asyncio
async def test_add_role_to_user_is_gated_on_the_role(db_session, unit, tenant):
    role = await create_role(db_session, "Admin", unit.id)
    user = await usr_dbapi.create_user(db_session, "a@example.com", "secret", unit.id)
    ability = ability_for(tenant, allow("Role:*"), deny("Role:AddRoleToUser", resources=[role.id]))

    with pytest.raises(ResourceNotFound):
        await RoleService(db_session).add_role_to_user(ability, role.id, user.id)


@pytest.mark.asyncio
async def test_add_role_to_unknown_user(db_session, unit, tenant):
    role = await create_role(db_session, "Auditor", unit.id)
    ability = ability_for(tenant, allow("Role:AddRoleToUser"))

    with pytest.raises(ResourceNotFound) as exc_info:
        await RoleService(db_session).add_role_to_user(ability, role.id, "nobody")

    assert exc_info.value.resource_type == "User"


@pytest.mark.asyncio
async def test_remove_role_from_user(db_session, unit, tenant):
    role = await create_role(db_session, "Auditor", unit.id)
    user = await usr_dbapi.create_user(db_session, "a@example.com", "secret", unit.id, role_ids=[role.id])
    ability = ability_for(tenant, allow("Role:RemoveRoleFromUser"))

    await RoleService(db_session).remove_role_from_user(ability, role.id, user.id)

    links = (await db_session.execute(select(user_roles).where(user_roles.c.user_id == user.id))).all()
    assert links == []


@pytest.mark.asyncio
async def test_create_role_with_policies(db_session, unit, tenant):
    policy = await create_policy(db_session, unit.id, "read", "Allow", ["Group:GetGroup"])
    ability = ability_for(tenant, allow("Role:CreateRole"))

    role = await RoleService(db_session).create_role(ability, schema.RoleCreate(name="Reader", policy_ids=[policy.id]))

    assert role.unit_id == unit.id


@pytest.mark.asyncio
async def test_acting_as_role_of_another_unit(db_session, unit, other_unit):
    """A role owned by another unit re-scopes the user to that unit."""
    list_groups = await create_policy(db_session, other_unit.id, "list", "Allow", ["Group:ListGroups"])
    everything = await create_policy(db_session, unit.id, "all", "Allow", ["*"])
    role = await create_role(db_session, "Visitor", other_unit.id, policy_ids=[list_groups.id])
    home_group = await create_group(db_session, "Home", unit.id)
    foreign_group = await create_group(db_session, "Foreign", other_unit.id)
    user = await usr_dbapi.create_user(
        db_session, "a@example.com", "secret", unit.id, policy_ids=[everything.id], role_ids=[role.id]
    )
    await db_session.commit()

    loaded = await usr_dbapi.get_user_with_policies(db_session, user.id)
    aggregator = AbilityAggregator()

    home = aggregator.build(principal_from_user(loaded))
    assumed = aggregator.build(principal_from_user(loaded, role.id))

    assert [g.id for g in await GroupService(db_session).list(home)] == [home_group.id]
    assert [g.id for g in await GroupService(db_session).list(assumed)] == [foreign_group.id]
    assert [r.statement for r in assumed.rule_set] == ["list"]


@pytest.mark.asyncio
async def test_acting_as_unassigned_role(db_session, unit):
    user = await usr_dbapi.create_user(db_session, "a@example.com", "secret", unit.id)
    await db_session.commit()
    loaded = await usr_dbapi.get_user_with_policies(db_session, user.id)

    with pytest.raises(RoleNotAssigned):
        principal_from_user(loaded, "some-role")
