# (c) Copyright Datacraft, 2026
from iamkit.core.crud import CrudActions

ROLE_SCOPE = "Role"

ROLE_ACTIONS = CrudActions.for_scope(ROLE_SCOPE)
ADD_ROLE_TO_USER = "AddRoleToUser"
REMOVE_ROLE_FROM_USER = "RemoveRoleFromUser"
