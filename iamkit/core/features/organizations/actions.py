# (c) Copyright Datacraft, 2026
from iamkit.core.crud import CrudActions

ORGANIZATION_SCOPE = "Organization"

ORGANIZATION_ACTIONS = CrudActions.for_scope(ORGANIZATION_SCOPE)
