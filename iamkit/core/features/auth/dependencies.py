# (c) Copyright Datacraft, 2026
import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.exceptions import InvalidToken
from iamkit.core.features.policies.ability import Ability, AbilityAggregator, PrincipalIdentity
from iamkit.core.features.users.db import api as usr_dbapi

from .principal import principal_from_user
from .schema import TokenPayload
from .tokens import decode_access_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

aggregator = AbilityAggregator()


def get_token_payload(token: Annotated[str, Depends(oauth2_scheme)]) -> TokenPayload:
	return decode_access_token(token)


async def get_current_principal(
	payload: Annotated[TokenPayload, Depends(get_token_payload)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> PrincipalIdentity:
	"""Request-scoped snapshot of the caller, loaded once per request."""
	user = await usr_dbapi.get_user_with_policies(session, payload.sub)
	if user is None:
		logger.warning(f"Token subject {payload.sub} no longer exists")
		raise InvalidToken("Unknown user")
	return principal_from_user(user, payload.role_id)


def get_ability(
	principal: Annotated[PrincipalIdentity, Depends(get_current_principal)],
) -> Ability:
	return aggregator.build(principal)
