# (c) Copyright Datacraft, 2026
"""Policy service."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.crud import CrudService
from iamkit.core.tenancy.scope import tenant_scope

from . import schema
from .ability import Ability
from .actions import POLICY_ACTIONS
from .db.orm import Policy
from .engine import evaluate
from .models import Effect

logger = logging.getLogger(__name__)


class PolicyService(CrudService[Policy]):
	def __init__(self, session: AsyncSession):
		super().__init__(session, Policy, POLICY_ACTIONS)

	async def create_policy(self, ability: Ability, data: schema.PolicyCreate) -> Policy:
		return await self.create(ability, data.model_dump(mode="json"))

	async def update_policy(self, ability: Ability, policy_id: str, data: schema.PolicyUpdate) -> Policy:
		return await self.update(ability, policy_id, data.model_dump(mode="json", exclude_unset=True))


def explain(ability: Ability, request: schema.EvaluateRequest) -> schema.EvaluateResponse:
	"""Point-evaluate `request` and report which statement decided it."""
	if not tenant_scope.permits(request.resource, request.resource_type, ability.tenant):
		return schema.EvaluateResponse(
			allowed=False,
			effect=Effect.DENY,
			action=request.action,
			resource_type=request.resource_type,
			reason="Resource is outside the active tenant",
		)

	decision = evaluate(ability.rule_set, request.action, request.resource_type, request.resource)
	return schema.EvaluateResponse(**decision.to_dict())
