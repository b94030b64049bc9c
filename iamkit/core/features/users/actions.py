# (c) Copyright Datacraft, 2026
from iamkit.core.crud import CrudActions

USER_SCOPE = "User"

USER_ACTIONS = CrudActions.for_scope(USER_SCOPE)
ADD_GROUP_TO_USER = "AddGroupToUser"
