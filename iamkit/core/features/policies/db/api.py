# (c) Copyright Datacraft, 2026
"""Policies database API."""
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.exceptions import ResourceNotFound

from ..models import PolicyStatement
from ..parser import parse_statement
from .orm import Policy


def statement_from_orm(policy: Policy) -> PolicyStatement:
	return parse_statement({
		"id": policy.id,
		"name": policy.name,
		"effect": policy.effect,
		"actions": policy.actions,
		"resources": policy.resources,
		"condition": policy.condition,
	})


def statements_from_orm(policies: Sequence[Policy]) -> tuple[PolicyStatement, ...]:
	return tuple(statement_from_orm(p) for p in policies)


async def get_policies_in_unit(
	session: AsyncSession,
	policy_ids: Sequence[str],
	unit_id: str,
) -> list[Policy]:
	"""Policies of `unit_id` in the order of `policy_ids`; all must exist."""
	if not policy_ids:
		return []
	stmt = select(Policy).where(Policy.id.in_(set(policy_ids)), Policy.unit_id == unit_id)
	result = await session.execute(stmt)
	found = {p.id: p for p in result.scalars()}

	for policy_id in policy_ids:
		if policy_id not in found:
			raise ResourceNotFound("Policy", policy_id)
	return [found[policy_id] for policy_id in dict.fromkeys(policy_ids)]


async def create_policy(
	session: AsyncSession,
	unit_id: str,
	name: str,
	effect: str,
	actions: list[str],
	resources: list[str] | None = None,
	condition: dict | None = None,
) -> Policy:
	"""Insert a policy without any access check (seeding, tests)."""
	policy = Policy(
		name=name,
		effect=effect,
		actions=actions,
		resources=["*"] if resources is None else resources,
		condition=condition,
		unit_id=unit_id,
	)
	session.add(policy)
	await session.flush()
	return policy
