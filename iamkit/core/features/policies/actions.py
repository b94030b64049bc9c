# (c) Copyright Datacraft, 2026
from iamkit.core.crud import CrudActions

POLICY_SCOPE = "Policy"

POLICY_ACTIONS = CrudActions.for_scope(POLICY_SCOPE, "Policies")
