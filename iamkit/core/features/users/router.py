# (c) Copyright Datacraft, 2026
"""Users API router."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.auth.dependencies import get_ability
from iamkit.core.features.policies.ability import Ability

from .schema import User, UserCreate, UserDetails, UserUpdate
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[User])
async def list_users(
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await UserService(session).list(ability)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
	data: UserCreate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	user = await UserService(session).create_user(ability, data)
	await session.commit()
	return user


@router.get("/{user_id}", response_model=UserDetails)
async def get_user(
	user_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await UserService(session).get_details(ability, user_id)


@router.patch("/{user_id}", response_model=User)
async def update_user(
	user_id: str,
	data: UserUpdate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	user = await UserService(session).update_user(ability, user_id, data)
	await session.commit()
	return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user(
	user_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await UserService(session).remove_user(ability, user_id)
	await session.commit()


@router.post("/{user_id}/groups/{group_id}", response_model=UserDetails)
async def add_group_to_user(
	user_id: str,
	group_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	user = await UserService(session).add_group_to_user(ability, user_id, group_id)
	await session.commit()
	return user
