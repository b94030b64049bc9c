# (c) Copyright Datacraft, 2026
from iamkit.core.crud import CrudActions

UNIT_SCOPE = "Unit"

UNIT_ACTIONS = CrudActions.for_scope(UNIT_SCOPE)
CREATE_CHILD_UNIT = "CreateChildUnit"
