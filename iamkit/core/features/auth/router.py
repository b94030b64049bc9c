# (c) Copyright Datacraft, 2026
"""Login and role assumption."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.policies.ability import PrincipalIdentity, assume_role
from iamkit.core.features.users.db import api as usr_dbapi

from .dependencies import get_current_principal
from .principal import principal_from_user
from .schema import Me, Token
from .tokens import create_access_token

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=Token)
async def login(
	form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
	db_session: Annotated[AsyncSession, Depends(get_db)],
) -> Token:
	"""Authenticate with email and password, return an access token."""
	user = await usr_dbapi.get_user_by_email(db_session, form_data.username)
	if user is None or not usr_dbapi.verify_password(user, form_data.password):
		logger.warning(f"Login failed for '{form_data.username}'")
		raise HTTPException(
			status_code=status.HTTP_401_UNAUTHORIZED,
			detail="Incorrect email or password",
			headers={"WWW-Authenticate": "Bearer"},
		)

	user = await usr_dbapi.get_user_with_policies(db_session, user.id)
	token = create_access_token(principal_from_user(user))
	logger.info(f"Login successful for '{form_data.username}'")
	return token


@router.post("/assume/{role_id}", response_model=Token)
async def assume(
	role_id: str,
	principal: Annotated[PrincipalIdentity, Depends(get_current_principal)],
) -> Token:
	"""Issue a short-lived token acting as one of the caller's roles."""
	assumed = assume_role(principal, role_id)
	logger.info(f"User {principal.user_id} assumed role {role_id}")
	return create_access_token(assumed)


@router.get("/me", response_model=Me)
async def me(
	principal: Annotated[PrincipalIdentity, Depends(get_current_principal)],
) -> Me:
	tenant = principal.tenant
	if principal.assumed_role_id is not None:
		tenant = principal.role(principal.assumed_role_id).tenant
	return Me(
		id=principal.user_id,
		email=principal.email,
		unit_id=tenant.unit_id,
		organization_id=tenant.organization_id,
		assumed_role_id=principal.assumed_role_id,
		roles=[r.id for r in principal.roles],
		groups=[g.id for g in principal.groups],
	)
