# (c) Copyright Datacraft, 2026
"""Signed access tokens."""
import logging
from datetime import datetime, timedelta, timezone

import jwt

from iamkit.core.config import get_settings
from iamkit.core.exceptions import InvalidToken
from iamkit.core.features.policies.ability import PrincipalIdentity

from .schema import Token, TokenPayload

logger = logging.getLogger(__name__)


def create_access_token(principal: PrincipalIdentity) -> Token:
	"""
	Issue a token for `principal`.

	A principal acting as a role gets the role's unit and organization as
	its tenant claims, a `role_id` claim and a shorter lifetime.
	"""
	settings = get_settings()
	now = datetime.now(timezone.utc)

	tenant = principal.tenant
	if principal.assumed_role_id is not None:
		tenant = principal.role(principal.assumed_role_id).tenant
		lifetime = timedelta(minutes=settings.assumed_role_token_expire_minutes)
	else:
		lifetime = timedelta(minutes=settings.access_token_expire_minutes)

	payload = {
		"sub": principal.user_id,
		"email": principal.email,
		"unit": tenant.unit_id,
		"organization": tenant.organization_id,
		"roles": [role.id for role in principal.roles],
		"exp": int((now + lifetime).timestamp()),
		"iat": int(now.timestamp()),
	}
	if principal.assumed_role_id is not None:
		payload["role_id"] = principal.assumed_role_id

	token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
	return Token(access_token=token, expires_in=int(lifetime.total_seconds()))


def decode_access_token(token: str) -> TokenPayload:
	settings = get_settings()
	try:
		payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
	except jwt.PyJWTError as e:
		logger.warning(f"Rejected access token: {e}")
		raise InvalidToken("Invalid or expired token") from e
	return TokenPayload(**payload)
