# (c) Copyright Datacraft, 2026
"""FastAPI router for policy management."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.auth.dependencies import get_ability

from .ability import Ability
from .schema import EvaluateRequest, EvaluateResponse, Policy, PolicyCreate, PolicyUpdate
from .service import PolicyService, explain

router = APIRouter(prefix="/policies", tags=["policies"])


@router.get("", response_model=list[Policy])
async def list_policies(
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await PolicyService(session).list(ability)


@router.post("", response_model=Policy, status_code=status.HTTP_201_CREATED)
async def create_policy(
	data: PolicyCreate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	policy = await PolicyService(session).create_policy(ability, data)
	await session.commit()
	return policy


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_policy(
	request: EvaluateRequest,
	ability: Annotated[Ability, Depends(get_ability)],
):
	"""Dry-run an authorization decision with the caller's own policies."""
	return explain(ability, request)


@router.get("/{policy_id}", response_model=Policy)
async def get_policy(
	policy_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await PolicyService(session).get(ability, policy_id)


@router.patch("/{policy_id}", response_model=Policy)
async def update_policy(
	policy_id: str,
	data: PolicyUpdate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	policy = await PolicyService(session).update_policy(ability, policy_id, data)
	await session.commit()
	return policy


@router.delete("/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_policy(
	policy_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await PolicyService(session).remove(ability, policy_id)
	await session.commit()
