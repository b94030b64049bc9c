# (c) Copyright Datacraft, 2026
"""Groups API router."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.auth.dependencies import get_ability
from iamkit.core.features.policies.ability import Ability

from .schema import Group, GroupCreate, GroupUpdate
from .service import GroupService

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.get("", response_model=list[Group])
async def list_groups(
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	"""Groups of the active unit the caller may list."""
	return await GroupService(session).list(ability)


@router.post("", response_model=Group, status_code=status.HTTP_201_CREATED)
async def create_group(
	data: GroupCreate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	group = await GroupService(session).create_group(ability, data)
	await session.commit()
	return group


@router.get("/{group_id}", response_model=Group)
async def get_group(
	group_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await GroupService(session).get(ability, group_id)


@router.patch("/{group_id}", response_model=Group)
async def update_group(
	group_id: str,
	data: GroupUpdate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	group = await GroupService(session).update_group(ability, group_id, data)
	await session.commit()
	return group


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_group(
	group_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await GroupService(session).remove_group(ability, group_id)
	await session.commit()
