# (c) Copyright Datacraft, 2026
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.crud import CrudService

from .actions import ORGANIZATION_ACTIONS
from .db.orm import Organization


class OrganizationService(CrudService[Organization]):
	def __init__(self, session: AsyncSession):
		super().__init__(session, Organization, ORGANIZATION_ACTIONS)
