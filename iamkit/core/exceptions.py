# (c) Copyright Datacraft, 2026
"""Domain exceptions raised by the access-control layer."""


class IAMError(Exception):
	"""Base class for iamkit errors."""


class AuthorizationDenied(IAMError):
	"""A point check answered Deny for `action` on `resource_type`."""

	def __init__(self, action: str, resource_type: str):
		self.action = action
		self.resource_type = resource_type
		super().__init__(f'Cannot execute "{action}" on "{resource_type}"')


class RoleNotAssigned(IAMError):
	"""The principal asked to assume a role it does not hold."""

	def __init__(self, role_id: str):
		self.role_id = role_id
		super().__init__("You can't assume that role")


class ResourceNotFound(IAMError):
	"""No visible resource matched the lookup criteria."""

	def __init__(self, resource_type: str, resource_id: str | None = None):
		self.resource_type = resource_type
		self.resource_id = resource_id
		if resource_id is None:
			super().__init__(f"{resource_type} not found")
		else:
			super().__init__(f"{resource_type} {resource_id} not found")


class InvalidToken(IAMError):
	"""Access token is missing, expired or does not verify."""
