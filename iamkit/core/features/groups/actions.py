# (c) Copyright Datacraft, 2026
from iamkit.core.crud import CrudActions

GROUP_SCOPE = "Group"

GROUP_ACTIONS = CrudActions.for_scope(GROUP_SCOPE)
