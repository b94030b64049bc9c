# (c) Copyright Datacraft, 2026
"""Roles API router."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.auth.dependencies import get_ability
from iamkit.core.features.policies.ability import Ability

from .schema import Role, RoleCreate, RoleUpdate
from .service import RoleService

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", response_model=list[Role])
async def list_roles(
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await RoleService(session).list(ability)


@router.post("", response_model=Role, status_code=status.HTTP_201_CREATED)
async def create_role(
	data: RoleCreate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	role = await RoleService(session).create_role(ability, data)
	await session.commit()
	return role


@router.get("/{role_id}", response_model=Role)
async def get_role(
	role_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await RoleService(session).get(ability, role_id)


@router.patch("/{role_id}", response_model=Role)
async def update_role(
	role_id: str,
	data: RoleUpdate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	role = await RoleService(session).update_role(ability, role_id, data)
	await session.commit()
	return role


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_role(
	role_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await RoleService(session).remove_role(ability, role_id)
	await session.commit()


@router.post("/{role_id}/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_role_to_user(
	role_id: str,
	user_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await RoleService(session).add_role_to_user(ability, role_id, user_id)
	await session.commit()


@router.delete("/{role_id}/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_role_from_user(
	role_id: str,
	user_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await RoleService(session).remove_role_from_user(ability, role_id, user_id)
	await session.commit()
