# (c) Copyright Datacraft, 2026
"""Users database models and operations."""

from .orm import User, user_groups, user_policies, user_roles

__all__ = ["User", "user_groups", "user_policies", "user_roles"]
