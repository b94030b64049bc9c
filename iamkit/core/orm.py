# (c) Copyright Datacraft, 2026
"""Re-export ORM models; importing this module registers every table."""
from iamkit.core.features.organizations.db.orm import Organization
from iamkit.core.features.units.db.orm import Unit
from iamkit.core.features.policies.db.orm import Policy
from iamkit.core.features.groups.db.orm import Group, group_policies
from iamkit.core.features.roles.db.orm import Role, role_policies
from iamkit.core.features.users.db.orm import User, user_groups, user_policies, user_roles

__all__ = [
	"Organization",
	"Unit",
	"Policy",
	"Group",
	"Role",
	"User",
	"group_policies",
	"role_policies",
	"user_groups",
	"user_policies",
	"user_roles",
]
